import threading
import time
import pytest
from agentchat.errors import GenerationError
from agentchat.fakes import KeywordEncoder
from agentchat.rag.ingest import chunk_text, ingest_directory
from agentchat.rag.retrieval import WorkspaceIndex


@pytest.fixture
def workspace_index(engine):
    return WorkspaceIndex(engine, KeywordEncoder())


def test_search_returns_nearest_first(workspace_index):
    workspace_index.add_texts("ws-1", "listing.txt", [
        "The garden faces south. The garden has a pond.",
        "The house price is negotiable.",
        "A loan can be arranged.",
    ])

    results = workspace_index.search("ws-1", "How big is the garden?", top_k=2)

    assert results[0] == "The garden faces south. The garden has a pond."
    assert len(results) == 2


def test_search_is_scoped_to_workspace(workspace_index):
    workspace_index.add_texts("ws-1", "a.txt", ["The house price is high."])
    workspace_index.add_texts("ws-2", "b.txt", ["The house price is low."])

    assert workspace_index.search("ws-2", "house price", top_k=5) == ["The house price is low."]


def test_search_empty_workspace(workspace_index):
    assert workspace_index.search("empty", "anything") == []


def test_encoder_failure_becomes_generation_error(engine):
    class BrokenEncoder:
        def encode(self, texts):
            raise RuntimeError("model not loaded")

    with pytest.raises(GenerationError):
        WorkspaceIndex(engine, BrokenEncoder()).add_texts("ws-1", "a.txt", ["text"])


def test_chunk_text():
    text = "First paragraph.\n\n\n\nSecond paragraph.\n\nThird."
    assert chunk_text(text) == ["First paragraph.", "Second paragraph.", "Third."]
    assert chunk_text(text, chunk_size=2) == ["First paragraph.\n\nSecond paragraph.", "Third."]


def test_ingest_directory(tmp_path, workspace_index):
    (tmp_path / "listing.txt").write_text("The garden is large.\n\nThe price is fixed.", encoding="utf-8")
    (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")

    assert ingest_directory(workspace_index, "ws-1", str(tmp_path)) == 2
    assert workspace_index.search("ws-1", "garden", top_k=1) == ["The garden is large."]


def test_encoder_is_loaded_once_under_concurrency(engine, monkeypatch):
    loads = []

    def fake_sentence_transformer(name):
        loads.append(name)
        time.sleep(0.05)
        return KeywordEncoder()

    monkeypatch.setattr("agentchat.rag.retrieval.SentenceTransformer", fake_sentence_transformer)
    workspace_index = WorkspaceIndex(engine, model_name="test-model")
    threads = [threading.Thread(target=lambda: workspace_index.encoder) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert loads == ["test-model"]
