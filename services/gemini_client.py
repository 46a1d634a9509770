"""Gemini model service used by the assessment pipeline and the chat assistant."""

import base64
import logging
from typing import Optional

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain.messages import AIMessage, HumanMessage, SystemMessage
from pydantic import BaseModel

from config.settings import Settings
from models.vehicle_damage import ImagePayload
from utils.errors import ConfigurationError, ModelUnavailable

logger = logging.getLogger(__name__)


class GeminiChat:
    """Stateful multi-turn channel: one system instruction, then message text per turn."""

    def __init__(self, model: ChatGoogleGenerativeAI, system_instruction: str):
        self._model = model
        self._messages = [SystemMessage(content=system_instruction)]

    def send(self, text: str) -> str:
        """
        Send one user message and return the model's reply.

        The exchange is only added to the channel transcript when the call succeeds.

        Raises:
            ModelUnavailable: If the Gemini call fails
        """
        message = HumanMessage(content=text)
        try:
            response = self._model.invoke(self._messages + [message])
        except Exception as e:
            raise ModelUnavailable.from_exception(e, "chat message") from e

        reply = response.text
        self._messages.extend([message, AIMessage(content=reply)])
        return reply


class GeminiClient:
    """Thin wrapper around one Gemini chat model."""

    def __init__(
        self,
        model_name: str,
        api_key: str,
        temperature: float = 1.0,
        media_resolution: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: int = 0,
    ):
        """
        Initialize the Gemini model.

        Raises:
            ConfigurationError: If no API key is supplied
        """
        if not api_key:
            raise ConfigurationError.missing("gemini_api_key")

        model_kwargs = {
            "model": model_name,
            "api_key": api_key,
            "temperature": temperature,
            "timeout": timeout,
            "max_retries": max_retries,
        }
        if media_resolution:
            model_kwargs["media_resolution"] = media_resolution

        self.model_name = model_name
        self.model = ChatGoogleGenerativeAI(**model_kwargs)

    @classmethod
    def for_analysis(cls, settings: Settings) -> "GeminiClient":
        """Client for per-image damage analysis (high media resolution)."""
        return cls(
            model_name=settings.gemini_analysis_model,
            api_key=settings.gemini_api_key,
            temperature=settings.gemini_temperature,
            media_resolution=settings.gemini_media_resolution,
            timeout=settings.gemini_timeout,
            max_retries=settings.gemini_max_retries,
        )

    @classmethod
    def for_text(cls, settings: Settings) -> "GeminiClient":
        """Client for the claims guide and the chat assistant."""
        return cls(
            model_name=settings.gemini_text_model,
            api_key=settings.gemini_api_key,
            temperature=settings.gemini_temperature,
            timeout=settings.gemini_timeout,
            max_retries=settings.gemini_max_retries,
        )

    def generate_structured(
        self,
        prompt: str,
        schema: type[BaseModel],
        image: Optional[ImagePayload] = None,
    ) -> str:
        """
        Request a JSON response constrained to the schema and return its raw text.

        Validation of the text is left to the caller.

        Args:
            prompt: Instruction text
            schema: Pydantic model describing the expected JSON object
            image: Optional image sent alongside the prompt

        Returns:
            The model's response text

        Raises:
            ModelUnavailable: If the Gemini call fails
        """
        content_parts = [{"type": "text", "text": prompt}]
        if image is not None:
            content_parts.append({
                "type": "image",
                "base64": base64.b64encode(image.data).decode('utf-8'),
                "mime_type": image.mime_type,
            })

        structured_model = self.model.with_structured_output(
            schema=schema,
            method="json_schema",
            include_raw=True,
        )

        logger.debug("Requesting %s from %s", schema.__name__, self.model_name)
        try:
            result = structured_model.invoke([HumanMessage(content=content_parts)])
        except Exception as e:
            raise ModelUnavailable.from_exception(e, f"{schema.__name__} request") from e

        return result["raw"].text

    def create_chat(self, system_instruction: str) -> GeminiChat:
        return GeminiChat(self.model, system_instruction)
