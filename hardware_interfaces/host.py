"""
Host and Adapter Interfaces
===========================

The registry talks to the host engine through `HostBridge` and to
hardware adapters through `HardwareAdapter`. Both replace the untyped
function references the host used to hand over at startup;
`CallbackHost` still accepts such functions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from hardware_interfaces.models.frame import HardwareObject
from hardware_interfaces.models.node import NodeData

WriteCallback = Callable[[str, str, str, NodeData, Dict[str, HardwareObject], Dict[str, Any]], None]
ActionCallback = Callable[[Dict[str, Any]], None]
PersistCallback = Callable[[str], None]
ProvisionCallback = Callable[[str, str], None]


class HostBridge(ABC):
    """What the registry needs from the host engine."""

    @abstractmethod
    def on_write(
        self,
        object_id: str,
        frame_id: str,
        node_id: str,
        data: NodeData,
        objects: Dict[str, HardwareObject],
        type_modules: Dict[str, Any],
    ) -> None:
        """A node received new data; run routing/propagation."""

    @abstractmethod
    def emit(self, message: Dict[str, Any]) -> None:
        """Deliver an outbound action message."""

    @abstractmethod
    def persist(self, object_id: str) -> None:
        """Persist the object to storage."""

    def provision(self, object_name: str, frame_name: str) -> None:
        """Create on-disk folders for an object/frame. Optional."""


class NullHost(HostBridge):
    """Drops every notification."""

    def on_write(self, object_id, frame_id, node_id, data, objects, type_modules) -> None:
        pass

    def emit(self, message: Dict[str, Any]) -> None:
        pass

    def persist(self, object_id: str) -> None:
        pass


class CallbackHost(HostBridge):
    """Adapts plain host functions to `HostBridge`. Missing ones are no-ops."""

    def __init__(
        self,
        write_callback: Optional[WriteCallback] = None,
        action_callback: Optional[ActionCallback] = None,
        persist_callback: Optional[PersistCallback] = None,
        provision_callback: Optional[ProvisionCallback] = None,
    ):
        self.write_callback = write_callback
        self.action_callback = action_callback
        self.persist_callback = persist_callback
        self.provision_callback = provision_callback

    def on_write(self, object_id, frame_id, node_id, data, objects, type_modules) -> None:
        if self.write_callback is not None:
            self.write_callback(object_id, frame_id, node_id, data, objects, type_modules)

    def emit(self, message: Dict[str, Any]) -> None:
        if self.action_callback is not None:
            self.action_callback(message)

    def persist(self, object_id: str) -> None:
        if self.persist_callback is not None:
            self.persist_callback(object_id)

    def provision(self, object_name: str, frame_name: str) -> None:
        if self.provision_callback is not None:
            self.provision_callback(object_name, frame_name)


class HardwareAdapter:
    """
    Base class for hardware adapters.

    Override the capabilities you need; the defaults do nothing.
    """

    name: str = "adapter"

    def on_read(self, data: Any) -> None:
        """Host pushed data into one of this adapter's nodes."""

    def on_connect(self, data: Any) -> None:
        """Host connected a link to one of this adapter's nodes."""

    def on_reset(self) -> None:
        """Registry finished a reset sweep."""

    def on_shutdown(self) -> None:
        """Process is shutting down; release hardware."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
