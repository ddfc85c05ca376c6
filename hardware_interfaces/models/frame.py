"""
Frame and Object Models
=======================

Hardware objects own frames, frames own nodes and links.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Any, Tuple

from hardware_interfaces.models.node import Node


FRAME_LOCATIONS = ("local", "global")


@dataclass
class Frame:
    """
    A named sub-unit of an object.

    Placement and visibility are stored for the editor UI and have no
    effect on routing. Links are opaque records owned by the host engine.
    """
    id: str = ""
    name: str = ""
    object_id: Optional[str] = None

    # Placement relative to the marker origin
    x: float = 0
    y: float = 0
    scale: float = 1
    matrix: List[float] = field(default_factory=list)  # 4x4, row major

    # Editor flags
    visible: bool = False
    visible_text: bool = False
    visible_editing: bool = False

    memory: Dict[str, Any] = field(default_factory=dict)
    links: Dict[str, Any] = field(default_factory=dict)
    nodes: Dict[str, Node] = field(default_factory=dict)

    location: str = "local"   # local: node names are exposed to adapters
    src: str = "editor"

    def __post_init__(self):
        if self.location not in FRAME_LOCATIONS:
            raise ValueError(
                f"Frame location must be one of {FRAME_LOCATIONS}, got {self.location!r}"
            )
        if self.matrix and len(self.matrix) != 16:
            raise ValueError(f"Frame matrix must hold 16 values, got {len(self.matrix)}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "objectId": self.object_id,
            "x": self.x,
            "y": self.y,
            "scale": self.scale,
            "matrix": list(self.matrix),
            "visible": self.visible,
            "visibleText": self.visible_text,
            "visibleEditing": self.visible_editing,
            "memory": self.memory,
            "links": self.links,
            "nodes": {k: n.to_dict() for k, n in self.nodes.items()},
            "location": self.location,
            "src": self.src,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Frame:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            object_id=data.get("objectId"),
            x=data.get("x", 0),
            y=data.get("y", 0),
            scale=data.get("scale", 1),
            matrix=list(data.get("matrix", [])),
            visible=data.get("visible", False),
            visible_text=data.get("visibleText", False),
            visible_editing=data.get("visibleEditing", False),
            memory=data.get("memory", {}),
            links=data.get("links", {}),
            nodes={k: Node.from_dict(n) for k, n in data.get("nodes", {}).items()},
            location=data.get("location", "local"),
            src=data.get("src", "editor"),
        )


@dataclass
class HardwareObject:
    """A logical device exposing one or more frames."""
    object_id: str = ""
    name: str = ""
    deactivated: bool = False
    developer: bool = False
    frames: Dict[str, Frame] = field(default_factory=dict)

    @property
    def active(self) -> bool:
        return not self.deactivated

    def iter_nodes(self) -> Iterator[Tuple[Frame, Node]]:
        for frame in self.frames.values():
            for node in frame.nodes.values():
                yield frame, node

    def node_count(self) -> int:
        return sum(len(f.nodes) for f in self.frames.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "objectId": self.object_id,
            "name": self.name,
            "deactivated": self.deactivated,
            "developer": self.developer,
            "frames": {k: f.to_dict() for k, f in self.frames.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> HardwareObject:
        return cls(
            object_id=data.get("objectId", ""),
            name=data.get("name", ""),
            deactivated=data.get("deactivated", False),
            developer=data.get("developer", False),
            frames={k: Frame.from_dict(f) for k, f in data.get("frames", {}).items()},
        )

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> HardwareObject:
        return cls.from_dict(json.loads(json_str))
