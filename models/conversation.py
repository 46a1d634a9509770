"""Models for the follow-up chat assistant."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ConversationRole(str, Enum):
    USER = "user"
    MODEL = "model"


class SessionState(str, Enum):
    """Lifecycle of a ConversationSession."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    SENDING = "sending"


class ConversationTurn(BaseModel):
    """One visible message in the chat history."""
    model_config = ConfigDict(frozen=True)

    role: ConversationRole
    text: str
