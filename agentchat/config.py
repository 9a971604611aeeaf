import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Database settings (SQLite by default, hosted Postgres in production)
DB_FILE = os.path.join(BASE_DIR, '..', 'db.sqlite')
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{os.path.abspath(DB_FILE)}")
DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

# Model and LLM settings
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai")  # "openai" or "ollama"
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
LLM_TIMEOUT = int(os.getenv("LLM_TIMEOUT", 60))

# RAG/Embeddings settings
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "all-MiniLM-L6-v2")
RAG_TOP_K = int(os.getenv("RAG_TOP_K", 5))

# Number of stored messages fed back to the model, 0 disables history
HISTORY_WINDOW = int(os.getenv("HISTORY_WINDOW", 4))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Server settings for `python -m agentchat.app.main`
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", 8000))

# Document requests
DOCUMENT_KEYWORDS = ("documentize", "document", "agreement")
DOCUMENT_PLACEHOLDER = "Check your Web3 Storage for the requested document."
DOCUMENT_FILENAME = "document.pdf"
DOCUMENT_MARGIN = 50
# Unicode TrueType font for document text, Helvetica is used when the file is missing
DOCUMENT_FONT_PATH = os.getenv("DOCUMENT_FONT_PATH", "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf")
DOCUMENT_FONT = "Helvetica"
DOCUMENT_FONT_SIZE = 12
