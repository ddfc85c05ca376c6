"""
Identifier Resolution
=====================

Maps human-readable object names to stable object ids and composes
frame and node ids from them.

Resolution itself belongs to the host; the registry only depends on the
`IdentifierResolver` interface. `LookupTableResolver` covers the common
case of a host-owned name -> entry table.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)


def compose_frame_id(object_id: str, frame_name: str) -> str:
    """Frame ids are the object id followed by the frame name."""
    return f"{object_id}{frame_name}"


def compose_node_id(object_id: str, frame_name: str, node_name: str) -> str:
    """Node ids are the frame id followed by the node name."""
    return f"{compose_frame_id(object_id, frame_name)}{node_name}"


class IdentifierResolver(ABC):
    """Name -> stable id contract consumed by the registry."""

    @abstractmethod
    def resolve_object_id(self, name: str) -> Optional[str]:
        """Resolve an object name. None when unknown."""

    @abstractmethod
    def resolve_target_id(self, name_or_id: str, base_dir: Optional[Path] = None) -> Optional[str]:
        """
        Resolve an object name or pass through a known object id.

        `base_dir` is the host's object directory, for resolvers that
        read object data from disk.
        """


class LookupTableResolver(IdentifierResolver):
    """
    Resolver over a name -> entry table.

    Entries are either id strings or mappings carrying an "id" key. The
    table is kept by reference so objects the host registers later
    resolve without rewiring. Resolution is in-memory, so the base
    directory is not read.
    """

    def __init__(self, lookup: Optional[Dict[str, Any]] = None):
        self.lookup: Dict[str, Any] = lookup if lookup is not None else {}

    def register(self, name: str, object_id: str) -> None:
        self.lookup[name] = {"id": object_id}

    def _entry_id(self, entry: Any) -> Optional[str]:
        if isinstance(entry, str):
            return entry
        if isinstance(entry, dict):
            return entry.get("id")
        return getattr(entry, "id", None)

    def resolve_object_id(self, name: str) -> Optional[str]:
        if name not in self.lookup:
            return None
        return self._entry_id(self.lookup[name])

    def resolve_target_id(self, name_or_id: str, base_dir: Optional[Path] = None) -> Optional[str]:
        object_id = self.resolve_object_id(name_or_id)
        if object_id is not None:
            return object_id
        for entry in self.lookup.values():
            if self._entry_id(entry) == name_or_id:
                return name_or_id
        logger.debug(f"No object id for target {name_or_id!r}")
        return None
