"""BaseService — shared foundation for cadencectl services.

Every service receives the frozen :class:`CadenceSettings` at construction
time and reads paths and limits from it rather than from globals.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cadencectl.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from cadencectl.config.settings import CadenceSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ScheduleService(BaseService):
            def list_events(self, ...) -> ServiceResult:
                ...
                return self._fail("list_events", ErrorCode.NOT_FOUND, "...")
    """

    def __init__(self, settings: CadenceSettings) -> None:
        self._settings = settings

    @staticmethod
    def _fail(op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        """Build an ``ok=False`` result and log it at debug level."""
        logger.debug("%s failed: %s (%s)", op, message, code)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=str(code), message=message, detail=detail),
        )
