class ChatError(Exception):
    """Base class for failures of the chat pipeline."""


class ValidationError(ChatError):
    """A required input is missing. The message is safe to show to the client."""


class PersistenceError(ChatError):
    """Reading from or writing to the chat store failed."""


class GenerationError(ChatError):
    """The embedding or language-model provider failed."""


class DocumentError(ChatError):
    """The reply could not be rendered as a PDF."""
