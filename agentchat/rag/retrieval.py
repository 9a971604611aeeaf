import logging
import threading
from typing import List
import numpy as np
import faiss
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from sentence_transformers import SentenceTransformer
from agentchat.config import EMBEDDING_MODEL
from agentchat.errors import GenerationError, PersistenceError
from agentchat.models import VectorEntry

logger = logging.getLogger(__name__)


class WorkspaceIndex:
    """Similarity search over the ``vector_store`` rows of a single workspace.

    Embeddings are stored as float32 bytes next to their text. A flat L2 FAISS
    index is built from the workspace's rows for each query, so entries of
    other workspaces are never candidates.
    """

    def __init__(self, engine, encoder=None, model_name=EMBEDDING_MODEL):
        self.engine = engine
        self._encoder = encoder  # anything with a sentence-transformers style encode()
        self.model_name = model_name
        self._lock = threading.Lock()

    @property
    def encoder(self):
        if self._encoder is None:
            with self._lock:
                if self._encoder is None:
                    self._encoder = SentenceTransformer(self.model_name)
        return self._encoder

    def _embed(self, texts):
        try:
            return np.asarray(self.encoder.encode(texts), dtype='float32')
        except Exception as e:
            logger.error(f"Error computing embeddings: {e}")
            raise GenerationError("The embedding model failed") from e

    def add_texts(self, workspace_id: str, source: str, texts: List[str]) -> int:
        if not texts:
            return 0
        embeddings = self._embed(texts).reshape(len(texts), -1)
        entries = [
            VectorEntry(workspace_id=workspace_id, source=source, content=text, embedding=emb.tobytes())
            for text, emb in zip(texts, embeddings)
        ]
        try:
            with Session(self.engine) as session:
                session.add_all(entries)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error storing embeddings for workspace {workspace_id}: {e}")
            raise PersistenceError("Could not store embeddings") from e
        return len(entries)

    def _load(self, workspace_id):
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(VectorEntry).where(VectorEntry.workspace_id == workspace_id).order_by(VectorEntry.id)
                ).all()
                return [(row.content, row.embedding) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Error reading vector store for workspace {workspace_id}: {e}")
            raise PersistenceError("Could not read the vector store") from e

    def search(self, workspace_id: str, query: str, top_k: int = 5) -> List[str]:
        rows = self._load(workspace_id)
        if not rows or top_k <= 0:
            return []
        embeddings = np.stack([np.frombuffer(emb, dtype='float32') for _, emb in rows])
        index = faiss.IndexFlatL2(embeddings.shape[1])
        index.add(embeddings)
        query_emb = self._embed(query).reshape(1, -1)
        D, I = index.search(query_emb, min(top_k, len(rows)))
        return [rows[idx][0] for idx in I[0] if idx >= 0]
