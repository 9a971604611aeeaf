import logging
import threading
from langchain_openai import ChatOpenAI
from langchain_ollama import OllamaLLM
from agentchat.config import LLM_PROVIDER, LLM_MODEL, OPENAI_API_KEY, OLLAMA_BASE_URL, LLM_TIMEOUT
from agentchat.errors import GenerationError
from agentchat.prompts import extract_final_answer

logger = logging.getLogger(__name__)


def create_llm(provider=LLM_PROVIDER, model=LLM_MODEL):
    """Build the LangChain model for the configured provider."""
    if provider == "openai":
        return ChatOpenAI(model=model, api_key=OPENAI_API_KEY, timeout=LLM_TIMEOUT)
    if provider == "ollama":
        return OllamaLLM(model=model, base_url=OLLAMA_BASE_URL, client_kwargs={"timeout": LLM_TIMEOUT})
    raise ValueError(f"Unknown LLM provider: {provider}")


class TextGenerator:
    """Generates a reply for a prompt with any LangChain runnable that supports ``stream``.

    The model is built on first use so a misconfigured provider fails the
    request instead of the application startup.
    """

    def __init__(self, llm=None, factory=create_llm):
        self._llm = llm
        self._factory = factory
        self._lock = threading.Lock()

    @property
    def llm(self):
        if self._llm is None:
            with self._lock:
                if self._llm is None:
                    self._llm = self._factory()
        return self._llm

    def generate(self, prompt: str) -> str:
        response = ""
        try:
            for chunk in self.llm.stream(prompt):
                # chat models stream message chunks, plain LLMs stream strings
                response += chunk if isinstance(chunk, str) else chunk.content
        except Exception as e:
            logger.error(f"Error calling LLM: {e}")
            raise GenerationError("The language model failed to answer") from e
        return extract_final_answer(response)
