"""BaseService: shared foundation for verial services.

Every service receives the resolved :class:`VerialSettings` at
construction time and reads its rates, weights and paths from there, so
one invocation sees one consistent configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from verial.config.settings import VerialSettings


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class EarningsService(BaseService):
            @traced
            def calculate(self, amount: int, ...) -> ServiceResult:
                fees = self._settings.fees
                ...
    """

    def __init__(self, settings: VerialSettings) -> None:
        self._settings = settings
