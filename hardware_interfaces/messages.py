"""
Outbound Messages
=================

Pydantic schemas for the action messages emitted to the host.

    {"advertiseConnection": {"object", "frame", "node", "logic", "names"}}
    {"reloadObject": {"object", "frame"}}
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AdvertiseConnectionMessage(BaseModel):
    """A new connectable point, with display names for the UI."""

    object: str
    frame: str
    node: str
    logic: bool = False
    names: List[str] = Field(default_factory=list)  # [object_name, node_name]

    def to_message(self) -> Dict[str, Any]:
        return {"advertiseConnection": self.model_dump()}


class ReloadObjectMessage(BaseModel):
    """Ask the host UI to reload an object, or one of its frames."""

    object: str
    frame: Optional[str] = None

    def to_message(self) -> Dict[str, Any]:
        return {"reloadObject": self.model_dump(exclude_none=True)}
