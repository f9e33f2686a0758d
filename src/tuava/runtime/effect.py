"""
Effects - descriptions of side effects to run after a state transition.

Building an Effect performs no I/O. Only Program interprets them, in one
place, so the set of variants here is closed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol


def _identity(value: Any) -> Any:
    return value


class Pending(Protocol):
    """Anything that will complete later: concurrent or asyncio futures."""

    def add_done_callback(self, fn: Callable[[Any], object], /) -> None: ...


class Effect:
    """Base of all effect variants, with the constructor helpers."""

    __slots__ = ()

    @staticmethod
    def none() -> Effect:
        return NONE

    @staticmethod
    def pure(message: Any) -> Effect:
        """Deliver ``message`` back to the program on the next iteration."""
        return Pure(message)

    @staticmethod
    def once(computation: Callable[[], Any], mapper: Optional[Callable[[Any], Any]] = None) -> Effect:
        """Run ``computation`` on a worker; ``mapper`` turns its result into a message."""
        return Once(computation, mapper or _identity)

    @staticmethod
    def batch(*effects: Effect) -> Effect:
        return Batch(tuple(effects))

    @staticmethod
    def quit() -> Effect:
        return QUIT

    @staticmethod
    def from_async(pending: Pending, mapper: Optional[Callable[[Any], Any]] = None) -> Effect:
        """Deliver the result of a future once it completes, on any thread."""
        return FromAsync(pending, mapper or _identity)


@dataclass(frozen=True)
class NoEffect(Effect):
    pass


@dataclass(frozen=True)
class Pure(Effect):
    message: Any


@dataclass(frozen=True)
class Once(Effect):
    computation: Callable[[], Any]
    mapper: Callable[[Any], Any] = _identity


@dataclass(frozen=True)
class Batch(Effect):
    effects: tuple[Effect, ...] = ()


@dataclass(frozen=True)
class Quit(Effect):
    pass


@dataclass(frozen=True)
class FromAsync(Effect):
    pending: Pending
    mapper: Callable[[Any], Any] = _identity


NONE = NoEffect()
QUIT = Quit()


def flatten(effect: Effect) -> list[Effect]:
    """Expand nested batches into their members, in declared order."""
    if isinstance(effect, Batch):
        result: list[Effect] = []
        for member in effect.effects:
            result.extend(flatten(member))
        return result
    return [effect]
