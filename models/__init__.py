from .api_models import (
    HealthResponse,
    ChatSessionRequest,
    ChatSessionResponse,
    ChatMessageRequest,
    ChatMessageResponse,
)
from .conversation import ConversationRole, ConversationTurn, SessionState
from .vehicle_damage import (
    DamageType,
    Severity,
    DamageDetail,
    DamageAnalysis,
    ImagePayload,
    AnalysisResult,
    EligibleClaim,
    ClaimsInformation,
    DamageReport,
    no_damage_claims_guide,
)

__all__ = [
    "HealthResponse",
    "ChatSessionRequest",
    "ChatSessionResponse",
    "ChatMessageRequest",
    "ChatMessageResponse",
    # Conversation
    "ConversationRole",
    "ConversationTurn",
    "SessionState",
    # Damage analysis
    "DamageType",
    "Severity",
    "DamageDetail",
    "DamageAnalysis",
    "ImagePayload",
    "AnalysisResult",
    "EligibleClaim",
    "ClaimsInformation",
    "DamageReport",
    "no_damage_claims_guide",
]
