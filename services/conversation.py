"""Report assistant chat session."""

import logging
import threading
from typing import Optional, Sequence

from models.conversation import ConversationRole, ConversationTurn, SessionState
from models.vehicle_damage import AnalysisResult
from prompts.conversation import ASSISTANT_SYSTEM_INSTRUCTION, get_priming_message
from utils.errors import ConfigurationError, VehicleDamageError

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "API Key is not configured. The chatbot cannot be initialized."
CONNECTION_FAILED_MESSAGE = "Sorry, I'm having trouble connecting right now. Please try again later."
SEND_FAILED_MESSAGE = "I'm sorry, I encountered an error. Could you please rephrase your question?"


class ConversationSession:
    """
    Multi-turn chat primed with the analysis results.

    The session starts UNINITIALIZED, becomes READY once the greeting has been
    received and moves to SENDING while a user message is in flight. Only one
    call may be outstanding at a time; a concurrent ``send`` is rejected.

    The visible history holds the greeting and every user/model turn in order.
    It is append-only. The priming message is sent to the model but is not
    part of the visible history.

    Args:
        model_service: Object providing ``create_chat(system_instruction)``
            whose result has ``send(text) -> str``. None means no credential
            is configured.
        system_instruction: Persona and scope of the assistant
    """

    def __init__(self, model_service, system_instruction: str = ASSISTANT_SYSTEM_INSTRUCTION):
        self._model_service = model_service
        self._system_instruction = system_instruction
        self._chat = None
        self._state = SessionState.UNINITIALIZED
        self._history: list[ConversationTurn] = []
        self._in_flight = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is SessionState.READY

    @property
    def history(self) -> list[ConversationTurn]:
        return list(self._history)

    def initialize(self, results: Sequence[AnalysisResult]) -> str:
        """
        Open the chat channel and request a greeting.

        On failure the session stays UNINITIALIZED and a fixed apology is
        recorded in place of the greeting.

        Returns:
            The greeting, or the apology when the session could not be opened
        """
        with self._in_flight:
            if self._state is not SessionState.UNINITIALIZED or self._chat is not None:
                raise RuntimeError("Conversation session is already initialized")

            if self._model_service is None:
                logger.warning("Chat assistant unavailable: Gemini API key is not configured")
                return self._append(ConversationRole.MODEL, NOT_CONFIGURED_MESSAGE)

            try:
                chat = self._model_service.create_chat(self._system_instruction)
                greeting = chat.send(get_priming_message(list(results)))
            except ConfigurationError as e:
                logger.warning("Chat assistant unavailable: %s", e)
                return self._append(ConversationRole.MODEL, NOT_CONFIGURED_MESSAGE)
            except VehicleDamageError as e:
                logger.warning("Chatbot initialization failed: %s", e)
                return self._append(ConversationRole.MODEL, CONNECTION_FAILED_MESSAGE)
            except Exception:
                logger.exception("Unexpected error while initializing chatbot")
                return self._append(ConversationRole.MODEL, CONNECTION_FAILED_MESSAGE)

            self._chat = chat
            self._state = SessionState.READY
            return self._append(ConversationRole.MODEL, greeting)

    def send(self, user_text: str) -> Optional[str]:
        """
        Send a user message.

        Rejected (returns None, history unchanged) when the text is blank, the
        session is not READY or another message is still in flight. A failed
        model call records a fixed apology as the reply and the session stays
        READY.

        Returns:
            The model's reply, the apology, or None when rejected
        """
        if not user_text or not user_text.strip():
            return None
        if not self._in_flight.acquire(blocking=False):
            logger.debug("Rejected chat message: another message is in flight")
            return None

        try:
            if self._state is not SessionState.READY:
                return None

            self._state = SessionState.SENDING
            self._append(ConversationRole.USER, user_text)
            try:
                reply = self._chat.send(user_text)
            except VehicleDamageError as e:
                logger.warning("Chatbot send message failed: %s", e)
                reply = SEND_FAILED_MESSAGE
            except Exception:
                logger.exception("Unexpected error while sending chat message")
                reply = SEND_FAILED_MESSAGE
            return self._append(ConversationRole.MODEL, reply)
        finally:
            if self._state is SessionState.SENDING:
                self._state = SessionState.READY
            self._in_flight.release()

    def _append(self, role: ConversationRole, text: str) -> str:
        self._history.append(ConversationTurn(role=role, text=text))
        return text
