import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from agentchat.errors import PersistenceError
from agentchat.models import Chat

logger = logging.getLogger(__name__)


class ChatStore:
    """Append-only conversation log, one row per message, scoped by workspace."""

    def __init__(self, engine):
        self.engine = engine

    def add_message(self, workspace_id: str, content: str, role: str) -> Chat:
        msg = Chat(workspace_id=workspace_id, content=content, role=role)
        try:
            with Session(self.engine) as session:
                session.add(msg)
                session.commit()
                session.refresh(msg)
        except SQLAlchemyError as e:
            logger.error(f"Error inserting {role} message: {e}")
            raise PersistenceError(f"Could not store {role} message") from e
        return msg

    def list_messages(self, workspace_id: str, limit: Optional[int] = None) -> List[Chat]:
        """Return the workspace's messages oldest first.

        With ``limit`` only the most recent ``limit`` messages are returned,
        still oldest first.
        """
        try:
            with Session(self.engine) as session:
                if limit is None:
                    statement = (
                        select(Chat)
                        .where(Chat.workspace_id == workspace_id)
                        .order_by(Chat.created_at, Chat.id)
                    )
                    return list(session.exec(statement).all())
                statement = (
                    select(Chat)
                    .where(Chat.workspace_id == workspace_id)
                    .order_by(Chat.created_at.desc(), Chat.id.desc())
                    .limit(limit)
                )
                return list(reversed(session.exec(statement).all()))
        except SQLAlchemyError as e:
            logger.error(f"Error fetching chat history: {e}")
            raise PersistenceError("Could not fetch chat history") from e
