# openrouter_flow/llm/models.py

from dataclasses import dataclass, asdict
from typing import Dict, List

# Popular models shown at the top of autocomplete results
FEATURED_MODELS = (
    "google/gemini-3-flash-preview",
    "google/gemini-2.0-flash-exp:free",
    "openai/gpt-4.1-mini",
    "openai/gpt-4.1",
    "anthropic/claude-opus-4.5",
    "deepseek/deepseek-v3.2",
    "meta-llama/llama-4-maverick",
    "mistralai/mistral-large-2512",
)

DEFAULT_MODEL = "google/gemini-3-flash-preview"

MAX_OUTPUT_TOKENS = 500

ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class Model:
    """A catalog entry as listed by OpenRouter."""
    id: str  # "vendor/name"
    name: str

    @classmethod
    def from_id(cls, model_id: str) -> "Model":
        """Build an entry from a bare identifier, using the part after the last "/" as its name."""
        return cls(id=model_id, name=model_id.rsplit("/", 1)[-1] or model_id)


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Unknown chat role '{self.role}'. Expected one of: {list(ROLES)}")

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class Credits:
    total_credits: float
    total_usage: float

    @property
    def remaining(self) -> float:
        return self.total_credits - self.total_usage


@dataclass(frozen=True)
class AutocompleteItem:
    """Presentation triple returned to the flow editor."""
    id: str
    name: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def messages_payload(messages: List[ChatMessage]) -> List[Dict[str, str]]:
    return [message.to_dict() for message in messages]
