from __future__ import annotations

class ServiceError(RuntimeError):
    """Base class for service-layer errors."""

class LLMError(ServiceError):
    """Errors from the LLM adapter."""

class LLMUnavailable(LLMError):
    """Network, timeout, HTTP status or quota failure talking to the LLM."""

class LLMEmptyResponse(LLMUnavailable):
    """The LLM answered but produced no message content."""

class LLMAuthError(LLMError):
    """Missing or rejected LLM credential.

    ``missing_credential`` is True when no key was configured at all, which is
    the one case surfaced to clients as ``API_KEY_REQUIRED``.
    """

    def __init__(self, message: str, missing_credential: bool = False):
        super().__init__(message)
        self.missing_credential = missing_credential

class RepoError(ServiceError):
    """Errors from repositories (I/O, parse, schema)."""
