from functools import lru_cache
from fastapi import Depends
from agentchat.chat_service import ChatService
from agentchat.database import engine
from agentchat.documents import PdfBuilder
from agentchat.llm import TextGenerator
from agentchat.rag.retrieval import WorkspaceIndex
from agentchat.store import ChatStore

# Collaborators are built once per process; tests swap them via app.dependency_overrides


@lru_cache
def get_store():
    return ChatStore(engine)


@lru_cache
def get_generator():
    return TextGenerator()


@lru_cache
def get_index():
    return WorkspaceIndex(engine)


@lru_cache
def get_documents():
    return PdfBuilder()


def get_chat_service(
    store=Depends(get_store),
    generator=Depends(get_generator),
    index=Depends(get_index),
    documents=Depends(get_documents),
) -> ChatService:
    return ChatService(store, generator, index, documents)
