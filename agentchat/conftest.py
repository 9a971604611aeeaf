import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine
from agentchat.app.dependencies import get_documents, get_generator, get_index, get_store
from agentchat.app.main import app
from agentchat.database import create_db_and_tables
from agentchat.documents import PdfBuilder
from agentchat.fakes import FakeGenerator, FakeIndex
from agentchat.store import ChatStore


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return ChatStore(engine)


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def index():
    return FakeIndex({"ws-1": ["The house at 12 Elm Street is listed at $450,000."]})


@pytest.fixture
def client(store, generator, index):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_generator] = lambda: generator
    app.dependency_overrides[get_index] = lambda: index
    app.dependency_overrides[get_documents] = lambda: PdfBuilder()
    yield TestClient(app)
    app.dependency_overrides.clear()
