"""
Object Manifests
================

Declarative description of objects, frames and nodes, used to seed a
registry from YAML:

    objects:
      Lamp:
        id: Lamp7f3a
        frames:
          Main:
            brightness: default
            switch: default
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

import yaml
from pydantic import BaseModel, Field

from hardware_interfaces.identifiers import LookupTableResolver
from hardware_interfaces.registry import HardwareInterfaces


class ObjectManifest(BaseModel):
    """One object: its stable id and frame name -> {node name: type}."""

    id: str
    frames: Dict[str, Dict[str, str]] = Field(default_factory=dict)


class Manifest(BaseModel):
    objects: Dict[str, ObjectManifest] = Field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Manifest":
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def lookup_table(self) -> Dict[str, Dict[str, str]]:
        return {name: {"id": obj.id} for name, obj in self.objects.items()}

    def resolver(self) -> LookupTableResolver:
        return LookupTableResolver(self.lookup_table())

    def advertise(self, hw: HardwareInterfaces) -> int:
        """add_node every entry. Returns the number of nodes advertised."""
        count = 0
        for object_name, obj in self.objects.items():
            for frame_name, nodes in obj.frames.items():
                for node_name, node_type in nodes.items():
                    if hw.add_node(object_name, frame_name, node_name, node_type) is not None:
                        count += 1
        return count
