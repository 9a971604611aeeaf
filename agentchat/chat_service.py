import logging
from dataclasses import dataclass
from typing import List, Optional
from agentchat.config import DOCUMENT_PLACEHOLDER, HISTORY_WINDOW, RAG_TOP_K
from agentchat.documents import is_document_request
from agentchat.errors import ValidationError
from agentchat.models import Chat
from agentchat.prompts import ASSISTANT_PROMPT, DOMAIN_PROMPT, ConversationContext, build_prompt

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    reply: str
    document: Optional[bytes] = None  # set for document requests


class ChatService:
    """Sequences one chat turn over the store, the semantic index, the model and the PDF builder.

    Every collaborator is passed in, so the service holds no per-request state.
    Failures surface as the ``agentchat.errors`` classes raised by the
    collaborators; nothing is retried and no stored row is rolled back.
    """

    def __init__(self, store, generator, index, documents, history_window=HISTORY_WINDOW, top_k=RAG_TOP_K):
        self.store = store
        self.generator = generator
        self.index = index
        self.documents = documents
        self.history_window = history_window
        self.top_k = top_k

    def load_context(self, workspace_id: str) -> ConversationContext:
        if self.history_window <= 0:
            return ConversationContext()
        return ConversationContext.from_messages(self.store.list_messages(workspace_id, limit=self.history_window))

    def generate_reply(self, workspace_id: str, message: str, context: ConversationContext, domain_mode: bool) -> str:
        if domain_mode:
            chunks = self.index.search(workspace_id, message, top_k=self.top_k)
            logger.info(f"Retrieved {len(chunks)} context chunks for workspace_id={workspace_id}")
            prompt = build_prompt(DOMAIN_PROMPT, context.as_text(), message, context_chunks=chunks)
        else:
            prompt = build_prompt(ASSISTANT_PROMPT, context.as_text(), message)
        logger.debug(f"LLM prompt: {prompt[:1000]} ...")
        return self.generator.generate(prompt)

    def send_message(self, workspace_id: Optional[str], message: Optional[str], domain_mode: bool = False) -> ChatResult:
        if not workspace_id:
            raise ValidationError("Workspace ID is required.")
        if not message:
            raise ValidationError("No message provided.")

        context = self.load_context(workspace_id)
        self.store.add_message(workspace_id, message, "user")

        logger.info(f"Generating reply: workspace_id={workspace_id}, domain_mode={domain_mode}, history={len(context)}")
        reply = self.generate_reply(workspace_id, message, context, domain_mode)

        document_request = is_document_request(message)
        self.store.add_message(workspace_id, DOCUMENT_PLACEHOLDER if document_request else reply, "assistant")

        if document_request:
            logger.info(f"Rendering reply as PDF for workspace_id={workspace_id}")
            return ChatResult(reply=reply, document=self.documents.render(reply))
        return ChatResult(reply=reply)

    def get_history(self, workspace_id: Optional[str]) -> List[Chat]:
        if not workspace_id:
            raise ValidationError("Workspace ID is required.")
        return self.store.list_messages(workspace_id)
