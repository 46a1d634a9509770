"""Prompts for the report assistant chat."""

from models.vehicle_damage import AnalysisResult


ASSISTANT_SYSTEM_INSTRUCTION = (
    "You are a helpful AI assistant for a vehicle damage analysis tool. Your name is VDA-Bot. "
    "You are friendly, concise, and your goal is to answer user questions about their damage "
    "report, repair costs, insurance claims, and next steps. You already have the full damage "
    "report context."
)

GREETING_REQUEST = (
    "Please greet the user and let them know you are ready to help with any questions "
    "about their report."
)


def _format_amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def get_priming_message(results: list[AnalysisResult]) -> str:
    """
    Build the first message of a chat session from the analysis results.

    One line per image: damage count, total cost and the damage clauses
    ("None" when the image has no damage), followed by the greeting request.
    """
    lines = ["Here is the vehicle damage assessment summary:"]
    for result in results:
        damages = result.analysis.damages
        clauses = ", ".join(damage.clause(location_article="the ") for damage in damages)
        lines.append(
            f"Image analysis found {len(damages)} damages with a total estimated cost of "
            f"INR {_format_amount(result.analysis.total_estimated_cost_inr)}. "
            f"Damages include: {clauses or 'None'}."
        )
    return "\n".join(lines) + "\n\n" + GREETING_REQUEST
