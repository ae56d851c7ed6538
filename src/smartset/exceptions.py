"""Custom exception hierarchy for Smart Set with helpful error messages."""

from __future__ import annotations

from typing import Any


class SmartSetError(Exception):
    """Base exception with helpful formatting for all Smart Set errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(SmartSetError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class StorageError(SmartSetError):
    """Persistence errors including connection and write failures."""

    pass


class NotFoundError(SmartSetError):
    """A referenced project, scene, board or event does not exist."""

    def __init__(self, kind: str, entity_id: str) -> None:
        """Initialize not-found error.

        Args:
            kind: Entity kind (project, scene, stripboard, ...)
            entity_id: Identifier that could not be resolved
        """
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(
            message=f"{kind.capitalize()} not found: {entity_id}",
            details={"kind": kind, "id": entity_id},
        )


class ValidationError(SmartSetError):
    """Input validation errors with details about what was expected."""

    pass


class SchedulingError(SmartSetError):
    """Stripboard operations that cannot be applied (unknown strip, bad days)."""

    pass


class LLMError(SmartSetError):
    """LLM service errors including credentials and model failures."""

    pass


class LLMCredentialError(LLMError):
    """No API credential is configured for the extraction service."""

    def __init__(self, message: str = "LLM API key is not configured") -> None:
        """Initialize credential error with a configuration hint."""
        super().__init__(
            message=message,
            hint=(
                "Set SMARTSET_LLM_API_KEY (or GEMINI_API_KEY / API_KEY) "
                "in the environment or .env file"
            ),
        )


class LLMResponseError(LLMError):
    """The model answered, but not with the JSON document that was requested."""

    def __init__(
        self,
        message: str,
        raw_preview: str | None = None,
        model: str | None = None,
    ) -> None:
        """Initialize response error.

        Args:
            message: Error message
            raw_preview: Beginning of the raw model output
            model: Model that produced the output
        """
        self.raw_preview = raw_preview
        self.model = model
        details: dict[str, Any] = {}
        if model:
            details["model"] = model
        if raw_preview:
            details["raw_preview"] = raw_preview
        super().__init__(message=message, details=details or None)


class LLMFallbackError(LLMError):
    """Error raised when every configured model fails."""

    def __init__(
        self,
        message: str = "All configured models failed",
        model_errors: dict[str, Exception] | None = None,
        attempted_models: list[str] | None = None,
    ) -> None:
        """Initialize fallback error with per-model failure information.

        Args:
            message: Primary error message
            model_errors: Mapping of model id to the error it raised
            attempted_models: Models in the order they were tried
        """
        self.model_errors = model_errors or {}
        self.attempted_models = attempted_models or []

        hint = None
        if self.attempted_models:
            hint = (
                f"Tried {len(self.attempted_models)} models. "
                "Check the API key, quota and model names"
            )

        details: dict[str, Any] = {
            "attempted_models": self.attempted_models,
        }
        if self.model_errors:
            details["model_errors"] = {
                model: str(error) for model, error in self.model_errors.items()
            }

        super().__init__(message=message, hint=hint, details=details)


class JobNotFoundError(SmartSetError):
    """Breakdown job id unknown or already evicted."""

    def __init__(self, job_id: str) -> None:
        """Initialize with the missing job id."""
        self.job_id = job_id
        super().__init__(
            message=f"Job not found: {job_id}",
            hint="Jobs expire after the configured TTL; start a new analysis",
            details={"job_id": job_id},
        )


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "db_path": "database_path",
        "api_key": "llm_api_key",  # pragma: allowlist secret
        "model": "llm_primary_model",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
