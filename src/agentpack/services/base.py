"""BaseService — shared foundation for agentpack services.

Every service receives the frozen :class:`PackSettings` at construction
time.  Services hold no other state, so one instance can serve any number
of builds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from agentpack.config.settings import PackSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class BuildService(BaseService):
            def build(self, payload, request) -> ServiceResult:
                self._log.info("build.start", target=request.target)
                ...
    """

    def __init__(self, settings: PackSettings) -> None:
        self._settings = settings
        self._log = structlog.get_logger(type(self).__module__)

    @property
    def settings(self) -> PackSettings:
        return self._settings
