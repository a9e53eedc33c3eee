"""Error types raised by resolution and build operations.

Infrastructure and resolution code raise these; the service layer converts
them into a failed ServiceResult carrying ``code``, ``message`` and ``detail``.
"""

from __future__ import annotations

from typing import Any


class AgentpackError(Exception):
    """Base class for all agentpack failures."""

    code = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class ResolutionError(AgentpackError):
    """No candidate directory holds a valid payload root."""

    code = "NOT_FOUND"


class AlreadyExistsError(AgentpackError):
    """Output directory exists and overwriting was not permitted."""

    code = "ALREADY_EXISTS"


class WriteError(AgentpackError):
    """A filesystem write, copy, removal or rename failed."""

    code = "WRITE_FAILED"


class PayloadIntegrityError(AgentpackError):
    """A payload document vanished between resolution and copy."""

    code = "PAYLOAD_INTEGRITY"
