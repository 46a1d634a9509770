from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from .conversation import ConversationTurn, SessionState
from .vehicle_damage import AnalysisResult


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(description="Health status")
    gemini_configured: bool = Field(description="Whether Gemini API is configured")
    analysis_model: str = Field(description="Model used for per-image analysis")
    text_model: str = Field(description="Model used for the claims guide and chat")


class ChatSessionRequest(BaseModel):
    """Request to open a chat session seeded with a damage report."""
    results: list[AnalysisResult] = Field(
        min_length=1,
        description="Per-image results from /vehicle-damage/analyze",
    )


class ChatSessionResponse(BaseModel):
    """State of a chat session."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", description="Identifier for follow-up messages")
    state: SessionState = Field(description="Session state")
    greeting: Optional[str] = Field(default=None, description="Assistant greeting when the session is ready")
    history: list[ConversationTurn] = Field(default_factory=list, description="Visible conversation history")


class ChatMessageRequest(BaseModel):
    """A user turn."""
    text: str = Field(description="Question about the damage report")


class ChatMessageResponse(BaseModel):
    """Assistant reply plus the updated history."""
    reply: str = Field(description="Assistant reply (an apology when the model call failed)")
    history: list[ConversationTurn] = Field(description="Visible conversation history")
