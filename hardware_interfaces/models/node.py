"""
Node Models
===========

Addressable I/O points and their data payload.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, Optional, Any


LOGIC_TYPE = "logic"
DEFAULT_TYPE = "default"
DEFAULT_FRAME_SIZE = 100


@dataclass
class NodeData:
    """Value payload carried by a node."""
    value: Any = 0
    mode: str = "f"       # datatype tag, e.g. "f" for float
    unit: Any = False
    unit_min: float = 0
    unit_max: float = 1

    def update(
        self,
        value: Any,
        mode: str = "f",
        unit: Any = False,
        unit_min: float = 0,
        unit_max: float = 1,
    ) -> None:
        """Replace every field in place."""
        self.value = value
        self.mode = mode
        self.unit = unit
        self.unit_min = unit_min
        self.unit_max = unit_max

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "mode": self.mode,
            "unit": self.unit,
            "unitMin": self.unit_min,
            "unitMax": self.unit_max,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> NodeData:
        return cls(
            value=data.get("value", 0),
            mode=data.get("mode", "f"),
            unit=data.get("unit", False),
            unit_min=data.get("unitMin", 0),
            unit_max=data.get("unitMax", 1),
        )


@dataclass
class Node:
    """An I/O point inside a frame."""
    id: str = ""
    name: str = ""
    type: str = DEFAULT_TYPE

    # Layout (stored only)
    x: int = 0
    y: int = 0
    frame_size_x: int = DEFAULT_FRAME_SIZE
    frame_size_y: int = DEFAULT_FRAME_SIZE

    data: NodeData = field(default_factory=NodeData)

    # Display override set by rename, cleared on re-advertisement
    text: Optional[str] = None

    # Owned by the frame UI instead of a hardware adapter
    frame_bound: bool = False

    @property
    def display_name(self) -> str:
        return self.text if self.text is not None else self.name

    @property
    def is_logic(self) -> bool:
        return self.type == LOGIC_TYPE

    @property
    def is_adapter_owned(self) -> bool:
        """Logic and frame-bound nodes are not advertised by adapters."""
        return not (self.is_logic or self.frame_bound)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "frameSizeX": self.frame_size_x,
            "frameSizeY": self.frame_size_y,
            "data": self.data.to_dict(),
            "text": self.text,
            "frame": self.frame_bound,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Node:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            type=data.get("type", DEFAULT_TYPE),
            x=data.get("x", 0),
            y=data.get("y", 0),
            frame_size_x=data.get("frameSizeX", DEFAULT_FRAME_SIZE),
            frame_size_y=data.get("frameSizeY", DEFAULT_FRAME_SIZE),
            data=NodeData.from_dict(data.get("data", {})),
            text=data.get("text"),
            frame_bound=data.get("frame", False),
        )

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> Node:
        return cls.from_dict(json.loads(json_str))


@dataclass
class ShadowEntry:
    """A node an adapter advertised during the current pass."""
    name: str
    type: str = DEFAULT_TYPE
