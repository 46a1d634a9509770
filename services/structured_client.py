"""Structured-output requests: one model call, then validate-then-construct."""

import logging
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from models.vehicle_damage import ImagePayload
from utils.errors import ModelResponseInvalid

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def parse_structured_response(raw_text: Optional[str], schema: type[T]) -> T:
    """
    Parse model output into the schema, rejecting anything that does not conform.

    Surrounding whitespace is trimmed; nothing else is repaired. Values are
    validated strictly, so a number sent as a string or a value outside a
    closed enum is a violation.

    Raises:
        ModelResponseInvalid: If the text is not JSON or fails validation
    """
    text = (raw_text or "").strip()
    try:
        return schema.model_validate_json(text, strict=True)
    except ValidationError as e:
        logger.error("Failed to parse model response as %s: %s", schema.__name__, text[:500])
        raise ModelResponseInvalid.from_parse_error(schema.__name__, e, text) from e


class StructuredModelClient:
    """
    Sends a single request to a model service and returns a validated object.

    The model service must provide
    ``generate_structured(prompt, schema, image=None) -> str``. Transport
    failures from the service (ModelUnavailable) are propagated unchanged and
    never retried here.
    """

    def __init__(self, model_service):
        self.model_service = model_service

    def request(
        self,
        prompt: str,
        schema: type[T],
        image: Optional[ImagePayload] = None,
    ) -> T:
        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")
        if image is not None and (not image.data or not image.mime_type):
            raise ValueError("image payload requires both data and a MIME type")

        raw_text = self.model_service.generate_structured(prompt, schema, image=image)
        return parse_structured_response(raw_text, schema)
