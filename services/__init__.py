from .gemini_client import GeminiClient, GeminiChat
from .structured_client import StructuredModelClient, parse_structured_response
from .damage_analyzer import DamageAnalyzer
from .claims_guide import ClaimsGuideGenerator
from .orchestrator import AnalysisOrchestrator, build_damage_summary
from .conversation import ConversationSession
from .session_store import ChatSessionStore
from .image_service import load_image_payload

__all__ = [
    "GeminiClient",
    "GeminiChat",
    "StructuredModelClient",
    "parse_structured_response",
    "DamageAnalyzer",
    "ClaimsGuideGenerator",
    "AnalysisOrchestrator",
    "build_damage_summary",
    "ConversationSession",
    "ChatSessionStore",
    "load_image_payload",
]
