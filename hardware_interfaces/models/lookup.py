"""
Lookup Results
==============

Typed found/not-found results for registry lookups and the callback
entry record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

Callback = Callable[[Any], Any]


@dataclass
class Lookup(Generic[T]):
    """
    Result of resolving an (object, frame, node) address.

    Misses are values, not exceptions: callers decide whether to log
    or ignore them.
    """
    value: Optional[T] = None
    object_id: Optional[str] = None
    frame_id: Optional[str] = None
    node_id: Optional[str] = None
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.value is not None

    def __bool__(self) -> bool:
        return self.found

    @classmethod
    def hit(cls, value: T, **ids: Optional[str]) -> Lookup[T]:
        return cls(value=value, **ids)

    @classmethod
    def miss(cls, reason: str, **ids: Optional[str]) -> Lookup[T]:
        return cls(reason=reason, **ids)


@dataclass
class CallbackEntry:
    """Read and connection callbacks registered for one node id."""
    node_id: str
    name: str = ""
    read_callback: Optional[Callback] = None
    connection_callback: Optional[Callback] = None

    @property
    def is_empty(self) -> bool:
        return self.read_callback is None and self.connection_callback is None
