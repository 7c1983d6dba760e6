"""Compensating-action unit of work for multi-step writes.

PostgREST has no client-side transactions, so a sequence of writes is made
all-or-nothing by logging an undo action after each successful step. If the
block fails, the undo actions run newest first and the original error is
re-raised.
"""

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

CompensatingAction = Callable[[], Awaitable[Any]]


@dataclass
class UnitOfWork:
    """Async context manager collecting compensating actions."""

    name: str
    _actions: list[tuple[str, CompensatingAction]] = field(default_factory=list, init=False, repr=False)
    rolled_back: bool = field(default=False, init=False)

    def on_rollback(self, description: str, action: CompensatingAction) -> None:
        """Register an undo step for a write that has just succeeded."""
        self._actions.append((description, action))

    @property
    def pending(self) -> int:
        """Number of registered compensating actions."""
        return len(self._actions)

    async def rollback(self) -> None:
        """Run registered compensating actions in reverse order.

        A failing action is logged and does not stop the remaining ones.
        """
        while self._actions:
            description, action = self._actions.pop()
            try:
                await action()
            except Exception:
                logger.exception("%s: compensation failed: %s", self.name, description)
        self.rolled_back = True

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is None:
            self._actions.clear()
            return False

        logger.warning("%s failed (%s), rolling back %d step(s)", self.name, exc_type.__name__, self.pending)
        await self.rollback()
        return False
