from sqlmodel import SQLModel, Field
from sqlalchemy import Column, LargeBinary
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel


def utcnow():
    return datetime.now(timezone.utc)


class Chat(SQLModel, table=True):
    __tablename__ = "Chat"

    id: Optional[int] = Field(default=None, primary_key=True)
    workspace_id: str = Field(index=True)
    content: str
    role: str  # "user" or "assistant"
    created_at: datetime = Field(default_factory=utcnow, index=True)


class VectorEntry(SQLModel, table=True):
    __tablename__ = "vector_store"

    id: Optional[int] = Field(default=None, primary_key=True)
    workspace_id: str = Field(index=True)
    source: str
    content: str
    embedding: bytes = Field(sa_column=Column(LargeBinary, nullable=False))  # float32 vector


class ChatRequest(BaseModel):  # body of POST /api/chat
    message: Optional[str] = None
