from .vehicle_damage import (
    DAMAGE_ANALYSIS_PROMPT,
    CLAIMS_GUIDE_PROMPT,
    get_damage_analysis_prompt,
    get_claims_guide_prompt,
)
from .conversation import (
    ASSISTANT_SYSTEM_INSTRUCTION,
    GREETING_REQUEST,
    get_priming_message,
)

__all__ = [
    "DAMAGE_ANALYSIS_PROMPT",
    "CLAIMS_GUIDE_PROMPT",
    "get_damage_analysis_prompt",
    "get_claims_guide_prompt",
    "ASSISTANT_SYSTEM_INSTRUCTION",
    "GREETING_REQUEST",
    "get_priming_message",
]
