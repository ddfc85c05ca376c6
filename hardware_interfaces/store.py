"""
Object Store
============

Owns the object -> frame -> node hierarchy, plus the shadow table of
nodes adapters advertised in the current pass.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from hardware_interfaces.identifiers import compose_frame_id, compose_node_id
from hardware_interfaces.models.frame import Frame, HardwareObject
from hardware_interfaces.models.lookup import Lookup
from hardware_interfaces.models.node import Node, ShadowEntry, DEFAULT_FRAME_SIZE
from hardware_interfaces.utils import random_int_inclusive

logger = logging.getLogger(__name__)

PLACEMENT_SPREAD = 100


class ObjectStore:
    """
    The shared object-id -> HardwareObject mapping.

    The mapping is held by reference: the host sees every mutation.
    """

    def __init__(
        self,
        objects: Optional[Dict[str, HardwareObject]] = None,
        node_factory: Callable[[], Node] = Node,
        random_placement: bool = True,
    ):
        self.objects: Dict[str, HardwareObject] = objects if objects is not None else {}
        self.node_factory = node_factory
        self.random_placement = random_placement

    # ─────────────────────────────────────────────────────────────
    # Lookups
    # ─────────────────────────────────────────────────────────────

    def find_object(self, object_id: Optional[str]) -> Lookup[HardwareObject]:
        if object_id is None:
            return Lookup.miss("object id unresolved")
        obj = self.objects.get(object_id)
        if obj is None:
            return Lookup.miss("object not stored", object_id=object_id)
        return Lookup.hit(obj, object_id=object_id)

    def find_frame(self, object_id: Optional[str], frame_name: str) -> Lookup[Frame]:
        found = self.find_object(object_id)
        if not found:
            return Lookup.miss(found.reason, object_id=object_id)
        frame_id = compose_frame_id(object_id, frame_name)
        frame = found.value.frames.get(frame_id)
        if frame is None:
            return Lookup.miss("frame not stored", object_id=object_id, frame_id=frame_id)
        return Lookup.hit(frame, object_id=object_id, frame_id=frame_id)

    def find_node(self, object_id: Optional[str], frame_name: str, node_name: str) -> Lookup[Node]:
        found = self.find_frame(object_id, frame_name)
        if not found:
            return Lookup.miss(found.reason, object_id=object_id, frame_id=found.frame_id)
        node_id = compose_node_id(object_id, frame_name, node_name)
        node = found.value.nodes.get(node_id)
        if node is None:
            return Lookup.miss(
                "node not stored", object_id=object_id, frame_id=found.frame_id, node_id=node_id
            )
        return Lookup.hit(node, object_id=object_id, frame_id=found.frame_id, node_id=node_id)

    def iter_frames(self, object_id: Optional[str], frame_name: Optional[str] = None) -> Iterator[Frame]:
        """Frames of an object, or just the named one."""
        if frame_name is not None:
            found = self.find_frame(object_id, frame_name)
            if found:
                yield found.value
            return
        found_obj = self.find_object(object_id)
        if found_obj:
            yield from list(found_obj.value.frames.values())

    # ─────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────

    def ensure_object(self, object_id: str, name: str = "") -> HardwareObject:
        obj = self.objects.get(object_id)
        if obj is None:
            obj = self.objects[object_id] = HardwareObject(object_id=object_id, name=name)
            logger.debug(f"Created object {object_id}")
        return obj

    def ensure_frame(self, object_id: str, frame_name: str) -> Frame:
        obj = self.ensure_object(object_id)
        frame_id = compose_frame_id(object_id, frame_name)
        frame = obj.frames.get(frame_id)
        if frame is None:
            frame = obj.frames[frame_id] = Frame(id=frame_id, object_id=object_id)
            logger.debug(f"Created frame {frame_id}")
        frame.name = frame_name
        return frame

    def _place(self) -> int:
        if not self.random_placement:
            return 0
        return random_int_inclusive(0, 2 * PLACEMENT_SPREAD) - PLACEMENT_SPREAD

    def add_node(
        self,
        object_id: str,
        object_name: str,
        frame_name: str,
        node_name: str,
        node_type: str,
        developer: bool = False,
    ) -> Node:
        """
        Create or refresh a node.

        Position and size are assigned once, at creation. Name and type
        are always reset and any rename override is dropped.
        """
        obj = self.ensure_object(object_id, object_name)
        obj.name = object_name
        obj.developer = developer

        frame = self.ensure_frame(object_id, frame_name)
        node_id = compose_node_id(object_id, frame_name, node_name)

        node = frame.nodes.get(node_id)
        if node is None:
            node = self.node_factory()
            node.id = node_id
            node.x = self._place()
            node.y = self._place()
            node.frame_size_x = DEFAULT_FRAME_SIZE
            node.frame_size_y = DEFAULT_FRAME_SIZE
            frame.nodes[node_id] = node
            logger.debug(f"Created node {node_id} at ({node.x}, {node.y})")

        node.name = node_name
        node.type = node_type
        node.text = None
        return node

    def remove_node(self, object_id: Optional[str], frame_name: str, node_name: str) -> bool:
        found = self.find_node(object_id, frame_name, node_name)
        if not found:
            logger.debug(f"remove_node miss: {found.reason}")
            return False
        del self.objects[object_id].frames[found.frame_id].nodes[found.node_id]
        logger.info(f"Deleted node {found.node_id}")
        return True

    def remove_all_nodes(self, object_id: Optional[str], frame_name: Optional[str] = None) -> List[str]:
        removed: List[str] = []
        for frame in self.iter_frames(object_id, frame_name):
            removed.extend(frame.nodes.keys())
            frame.nodes.clear()
        if removed:
            logger.info(f"Deleted {len(removed)} nodes from {object_id}")
        return removed


class ShadowTable:
    """
    Nodes advertised per object and frame in the current pass.

    Not owned by the object store; pruning compares the two. A prune
    closes the frame's pass without forgetting it, and the next
    advertisement on a closed frame starts a fresh one.
    """

    def __init__(self):
        self._entries: Dict[str, Dict[str, Dict[str, ShadowEntry]]] = {}
        self._closed: Set[Tuple[str, str]] = set()

    def advertise(self, object_id: str, frame_id: str, node_id: str, name: str, node_type: str) -> None:
        frames = self._entries.setdefault(object_id, {})
        nodes = frames.setdefault(frame_id, {})
        if (object_id, frame_id) in self._closed:
            self._closed.discard((object_id, frame_id))
            nodes.clear()
        nodes[node_id] = ShadowEntry(name=name, type=node_type)

    def close(self, object_id: str, frame_id: str) -> None:
        """Mark the frame's pass as pruned."""
        self._closed.add((object_id, frame_id))

    def is_closed(self, object_id: str, frame_id: str) -> bool:
        return (object_id, frame_id) in self._closed

    def is_advertised(self, object_id: str, frame_id: str, node_id: str) -> bool:
        return node_id in self._entries.get(object_id, {}).get(frame_id, {})

    def advertised(self, object_id: str, frame_id: str) -> Dict[str, ShadowEntry]:
        return dict(self._entries.get(object_id, {}).get(frame_id, {}))

    def discard(self, object_id: str, frame_id: str, node_id: str) -> None:
        self._entries.get(object_id, {}).get(frame_id, {}).pop(node_id, None)

    def clear(self, object_id: str, frame_id: Optional[str] = None) -> None:
        """Forget the object's (or one frame's) pass entirely."""
        if frame_id is None:
            self._entries.pop(object_id, None)
            self._closed = {key for key in self._closed if key[0] != object_id}
            return
        self._closed.discard((object_id, frame_id))
        frames = self._entries.get(object_id)
        if frames is not None:
            frames.pop(frame_id, None)
            if not frames:
                del self._entries[object_id]

    def __contains__(self, object_id: str) -> bool:
        return object_id in self._entries
