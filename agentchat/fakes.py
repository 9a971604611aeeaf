"""In-memory stand-ins for the model, the semantic index and the embedding model, used by the tests."""
import numpy as np


class FakeGenerator:
    def __init__(self, reply="Hello! How can I help you today?", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


class FakeIndex:
    def __init__(self, chunks=None):
        self.chunks = chunks or {}
        self.queries = []

    def search(self, workspace_id, query, top_k=5):
        self.queries.append((workspace_id, query, top_k))
        return self.chunks.get(workspace_id, [])[:top_k]


class KeywordEncoder:
    """Embeds text as keyword counts, enough to make nearest neighbours predictable."""

    vocabulary = ("house", "garden", "price", "loan")

    def encode(self, texts):
        if isinstance(texts, str):
            return self._vector(texts)
        return np.stack([self._vector(t) for t in texts])

    def _vector(self, text):
        words = text.lower().replace("?", " ").replace(".", " ").split()
        return np.array([words.count(w) for w in self.vocabulary], dtype='float32')
