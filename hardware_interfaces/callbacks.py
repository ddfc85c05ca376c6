"""
Callback Registry
=================

Maps node ids to adapter-supplied read and connection callbacks, in a
tree shaped like the object store (object -> frame -> node) but filled
independently of it. Entries may outlive the nodes they point at.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from hardware_interfaces.models.lookup import Callback, CallbackEntry, Lookup

logger = logging.getLogger(__name__)


class CallbackRegistry:
    """Read/connection callbacks keyed by object id, frame id and node id."""

    def __init__(self):
        self._tree: Dict[str, Dict[str, Dict[str, CallbackEntry]]] = {}

    def _entry(self, object_id: str, frame_id: str, node_id: str, name: str) -> CallbackEntry:
        nodes = self._tree.setdefault(object_id, {}).setdefault(frame_id, {})
        entry = nodes.get(node_id)
        if entry is None:
            entry = nodes[node_id] = CallbackEntry(node_id=node_id, name=name)
        return entry

    def add_read_listener(
        self, object_id: str, frame_id: str, node_id: str, name: str, callback: Callback
    ) -> None:
        """Register the read callback for a node. Last registration wins."""
        self._entry(object_id, frame_id, node_id, name).read_callback = callback
        logger.debug(f"Read listener set for {node_id}")

    def add_connection_listener(
        self, object_id: str, frame_id: str, node_id: str, name: str, callback: Callback
    ) -> None:
        """Register the connection callback for a node. Last registration wins."""
        self._entry(object_id, frame_id, node_id, name).connection_callback = callback
        logger.debug(f"Connection listener set for {node_id}")

    def remove_read_listeners(self, object_id: str, frame_id: str) -> List[str]:
        """
        Drop every read callback of a frame.

        Entries still holding a connection callback are kept; the frame
        container goes away once it is empty.
        """
        frames = self._tree.get(object_id)
        if frames is None or frame_id not in frames:
            return []

        nodes = frames[frame_id]
        cleared: List[str] = []
        for node_id in list(nodes):
            entry = nodes[node_id]
            if entry.read_callback is not None:
                entry.read_callback = None
                cleared.append(node_id)
            if entry.is_empty:
                del nodes[node_id]

        if not nodes:
            del frames[frame_id]
        if not frames:
            del self._tree[object_id]

        logger.debug(f"Removed {len(cleared)} read listeners from {frame_id}")
        return cleared

    def find(
        self, object_id: Optional[str], frame_id: Optional[str], node_id: Optional[str]
    ) -> Lookup[CallbackEntry]:
        ids = dict(object_id=object_id, frame_id=frame_id, node_id=node_id)
        if object_id is None:
            return Lookup.miss("object id unresolved", **ids)
        entry = self._tree.get(object_id, {}).get(frame_id, {}).get(node_id)
        if entry is None:
            return Lookup.miss("no callbacks registered", **ids)
        return Lookup.hit(entry, **ids)

    def __len__(self) -> int:
        return sum(len(nodes) for frames in self._tree.values() for nodes in frames.values())
