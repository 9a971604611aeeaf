from sqlmodel import SQLModel, create_engine
from agentchat.config import DATABASE_URL, DB_ECHO
import agentchat.models  # noqa: F401  registers the tables on SQLModel.metadata

engine = create_engine(DATABASE_URL, echo=DB_ECHO)

def create_db_and_tables(bind=None):
    SQLModel.metadata.create_all(bind or engine)
