from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

ASSISTANT_PROMPT = (
    "You are a helpful assistant. "
    "Use the conversation so far to answer the user's latest message. "
    "Never include any <think> tags, internal thoughts, or explanations of your reasoning. "
    "Respond ONLY with your answer, in a friendly, concise, and professional manner."
)

DOMAIN_PROMPT = (
    "You are a real estate agent's assistant. "
    "Use only the provided context below to answer the user's question. "
    "If the answer is not in the context, say 'I don't know based on the provided information.' "
    "Never include any <think> tags, internal thoughts, or explanations of your reasoning. "
    "Respond ONLY with the final answer to the user's question, in a friendly, concise, and professional manner. "
    "Do not repeat the user's question."
)


@dataclass(frozen=True)
class ConversationContext:
    """Prior turns handed to the reply generator for a single request."""

    turns: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)  # (role, content)

    @classmethod
    def from_messages(cls, messages: Sequence) -> "ConversationContext":
        return cls(tuple((m.role, m.content) for m in messages))

    def __len__(self):
        return len(self.turns)

    def as_text(self) -> str:
        return "\n".join(
            f"{'User' if role == 'user' else 'Assistant'}: {content}" for role, content in self.turns
        )


def build_prompt(system_prompt: str, history: str, user_query: str, context_chunks: List[str] = None) -> str:
    """Assemble the single prompt string sent to the model.

    The ``Context:`` section is only present when chunks were retrieved, and
    the history block only when there is history.
    """
    parts = [system_prompt]
    if context_chunks is not None:
        parts.append("Context:\n" + "\n\n".join(context_chunks))
    prompt = "\n\n".join(parts) + "\n\n"
    if history:
        prompt += history + "\n"
    return prompt + f"User: {user_query}\nAssistant: "


def extract_final_answer(text: str) -> str:  # removes the <think> block reasoning models emit
    return text.rsplit("</think>", 1)[-1].strip()
