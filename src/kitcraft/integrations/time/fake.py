"""Fake clock implementation for testing."""

from datetime import datetime

from kitcraft.integrations.time.abc import Time


class FakeTime(Time):
    """Clock frozen at a constructor-provided instant.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, current: datetime | None = None) -> None:
        self._current = current or datetime(2024, 3, 15, 9, 30, 0)
        self._now_calls = 0

    @property
    def now_calls(self) -> int:
        """Number of times now() was called.

        This property is for test assertions only.
        """
        return self._now_calls

    def now(self) -> datetime:
        self._now_calls += 1
        return self._current
