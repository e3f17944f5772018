"""BaseService — shared foundation for dtutil services.

Every service receives the resolved :class:`DtSettings` at construction
time and reports failures as ``ServiceResult(ok=False)`` instead of
raising.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from dtutil.services.result import INVALID_ARGUMENT, ServiceError, ServiceResult

if TYPE_CHECKING:
    from dtutil.config.settings import DtSettings
    from dtutil.domain.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ConversionService(BaseService):
            def parse(self, text: str) -> ServiceResult:
                try:
                    value = parse_datetime(text)
                except InvalidArgumentError as exc:
                    return self._invalid("parse", exc, text=text)
                ...
    """

    def __init__(self, settings: DtSettings) -> None:
        self._settings = settings

    @staticmethod
    def _invalid(op: str, exc: InvalidArgumentError, **detail: Any) -> ServiceResult:
        """Convert a domain error into a failed ServiceResult."""
        logger.debug("%s rejected its arguments: %s", op, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=INVALID_ARGUMENT, message=str(exc), detail=detail),
        )
