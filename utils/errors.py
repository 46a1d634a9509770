"""Error types for the vehicle damage assessment pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


# Detail keys kept out of API responses
INTERNAL_DETAIL_KEYS = frozenset({"raw_text", "error_class"})


class ErrorType(Enum):
    """Enumeration of error types in the assessment pipeline."""

    # Configuration Errors
    CONFIG_MISSING = "CONFIG_MISSING"

    # Model Service Errors
    MODEL_UNAVAILABLE = "MODEL_UNAVAILABLE"
    MODEL_RESPONSE_INVALID = "MODEL_RESPONSE_INVALID"
    INVALID_ANALYSIS_RESPONSE = "INVALID_ANALYSIS_RESPONSE"
    INVALID_CLAIMS_RESPONSE = "INVALID_CLAIMS_RESPONSE"

    # Pipeline Errors
    BATCH_ANALYSIS_FAILED = "BATCH_ANALYSIS_FAILED"
    INVALID_IMAGE = "INVALID_IMAGE"


@dataclass
class ErrorContext:
    """
    Context information for pipeline errors.

    Attributes:
        error_type: Type of error from ErrorType enum
        message: Human-readable, user-facing error message
        recoverable: Whether retrying the same operation may succeed
        details: Optional additional error details
        original_exception: Optional original exception that caused this error
    """

    error_type: ErrorType
    message: str
    recoverable: bool
    details: Optional[Dict[str, Any]] = None
    original_exception: Optional[BaseException] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert error context to a dictionary for logging."""
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details or {},
            "original_exception": str(self.original_exception) if self.original_exception else None,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Dictionary safe to return to API clients; raw model text and the cause are left out."""
        details = {
            key: value
            for key, value in (self.details or {}).items()
            if key not in INTERNAL_DETAIL_KEYS
        }
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": details,
        }


class VehicleDamageError(Exception):
    """
    Base exception for all assessment pipeline errors.

    Attributes:
        context: ErrorContext with detailed error information
    """

    def __init__(self, context: ErrorContext):
        self.context = context
        super().__init__(context.message)

    def __str__(self) -> str:
        return f"{self.context.error_type.value}: {self.context.message}"

    @property
    def message(self) -> str:
        return self.context.message

    def to_dict(self) -> Dict[str, Any]:
        return self.context.to_dict()

    def to_public_dict(self) -> Dict[str, Any]:
        return self.context.to_public_dict()


class ConfigurationError(VehicleDamageError):
    """Raised when a required setting, such as the Gemini API key, is absent."""

    @classmethod
    def missing(cls, setting_name: str) -> "ConfigurationError":
        context = ErrorContext(
            error_type=ErrorType.CONFIG_MISSING,
            message=f"{setting_name.upper()} is not configured",
            recoverable=False,
            details={"setting": setting_name},
        )
        return cls(context)


class ModelUnavailable(VehicleDamageError):
    """Transport, authentication or quota failure talking to the model service."""

    @classmethod
    def from_exception(cls, error: BaseException, operation: str) -> "ModelUnavailable":
        """
        Wrap an exception raised by the model SDK.

        Args:
            error: Original exception from the SDK
            operation: Description of the operation that failed

        Returns:
            ModelUnavailable instance
        """
        context = ErrorContext(
            error_type=ErrorType.MODEL_UNAVAILABLE,
            message=f"The AI service could not be reached during {operation}. Please try again later.",
            recoverable=True,
            details={"operation": operation, "error_class": type(error).__name__},
            original_exception=error,
        )
        return cls(context)


class ModelResponseInvalid(VehicleDamageError):
    """The model answered, but its text is not valid JSON for the requested schema."""

    default_message = "The AI model returned an invalid response."
    error_type = ErrorType.MODEL_RESPONSE_INVALID

    @classmethod
    def from_parse_error(
        cls,
        schema_name: str,
        error: BaseException,
        raw_text: str,
    ) -> "ModelResponseInvalid":
        """
        Create an error for a response that failed JSON parsing or validation.

        Args:
            schema_name: Name of the schema the response was validated against
            error: The JSON or validation error
            raw_text: The offending response text (truncated in details)

        Returns:
            ModelResponseInvalid instance
        """
        context = ErrorContext(
            error_type=cls.error_type,
            message=cls.default_message,
            recoverable=True,
            details={"schema": schema_name, "raw_text": raw_text[:500]},
            original_exception=error,
        )
        return cls(context)

    @classmethod
    def wrap(cls, error: "ModelResponseInvalid") -> "ModelResponseInvalid":
        """Re-signal a lower-level ModelResponseInvalid with this class's guidance."""
        context = ErrorContext(
            error_type=cls.error_type,
            message=cls.default_message,
            recoverable=True,
            details=dict(error.context.details or {}),
            original_exception=error,
        )
        return cls(context)


class InvalidAnalysisResponse(ModelResponseInvalid):
    """Per-image damage analysis could not be parsed."""

    default_message = "The AI model returned an invalid response. Please try again with clearer images."
    error_type = ErrorType.INVALID_ANALYSIS_RESPONSE


class InvalidClaimsResponse(ModelResponseInvalid):
    """Claims guide could not be parsed."""

    default_message = "The AI model returned an invalid response for the claims guide."
    error_type = ErrorType.INVALID_CLAIMS_RESPONSE


class BatchAnalysisFailed(VehicleDamageError):
    """One image of a batch failed, so the whole report is withheld."""

    @classmethod
    def from_image_failure(
        cls,
        image_index: int,
        image_name: str,
        error: BaseException,
    ) -> "BatchAnalysisFailed":
        if isinstance(error, VehicleDamageError):
            message = error.message
            recoverable = error.context.recoverable
            cause_type = error.context.error_type.value
        else:
            message = "An unknown error occurred during analysis."
            recoverable = False
            cause_type = ErrorType.BATCH_ANALYSIS_FAILED.value
        context = ErrorContext(
            error_type=ErrorType.BATCH_ANALYSIS_FAILED,
            message=message,
            recoverable=recoverable,
            details={
                "image_index": image_index,
                "image": image_name,
                "cause": cause_type,
            },
            original_exception=error,
        )
        return cls(context)

    @property
    def image_index(self) -> int:
        return self.context.details["image_index"]

    @property
    def cause(self) -> Optional[BaseException]:
        return self.context.original_exception


class InvalidImageError(VehicleDamageError):
    """Uploaded data is empty, too large or cannot be decoded as an image."""

    @classmethod
    def for_upload(cls, filename: str, reason: str) -> "InvalidImageError":
        context = ErrorContext(
            error_type=ErrorType.INVALID_IMAGE,
            message=f"'{filename}' is not a usable image: {reason}",
            recoverable=False,
            details={"filename": filename},
        )
        return cls(context)
