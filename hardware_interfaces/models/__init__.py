"""Data models for the hardware interface registry."""

from hardware_interfaces.models.node import Node, NodeData, ShadowEntry
from hardware_interfaces.models.frame import Frame, HardwareObject
from hardware_interfaces.models.lookup import Lookup, CallbackEntry

__all__ = [
    "Node", "NodeData", "ShadowEntry",
    "Frame", "HardwareObject",
    "Lookup", "CallbackEntry",
]
