"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Public service methods return ServiceResult; they never raise
for expected failures.  The CLI turns ``ok=False`` into a non-zero exit.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from agentpack.domain.errors import AgentpackError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: AgentpackError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.detail)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"build"``).
        data: Operation-specific payload.  Kept on failure where useful,
            e.g. the per-target outcomes of ``build_all``.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls, op: str, exc: AgentpackError, *, data: dict[str, Any] | None = None
    ) -> ServiceResult:
        """Build a failed result from a raised AgentpackError."""
        return cls(ok=False, op=op, data=data or {}, error=ServiceError.from_exception(exc))
