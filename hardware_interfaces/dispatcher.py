"""
Dispatcher
==========

Routes adapter writes into the object store and on to the host, and
host calls back into adapter callbacks.

Everything here is best effort: hardware polling loops call write()
continuously and must not fault on a name that is not resolvable yet.
Misses are logged at debug level and dropped.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from hardware_interfaces.callbacks import CallbackRegistry
from hardware_interfaces.host import HostBridge
from hardware_interfaces.identifiers import IdentifierResolver, compose_frame_id, compose_node_id
from hardware_interfaces.messages import AdvertiseConnectionMessage
from hardware_interfaces.models.lookup import CallbackEntry, Lookup
from hardware_interfaces.store import ObjectStore

logger = logging.getLogger(__name__)


class Dispatcher:
    """Write and callback delivery."""

    def __init__(
        self,
        store: ObjectStore,
        callbacks: CallbackRegistry,
        resolver: IdentifierResolver,
        host: HostBridge,
        type_modules: Optional[Dict[str, Any]] = None,
    ):
        self.store = store
        self.callbacks = callbacks
        self.resolver = resolver
        self.host = host
        self.type_modules: Dict[str, Any] = type_modules if type_modules is not None else {}

    def write(
        self,
        object_name: str,
        frame_name: str,
        node_name: str,
        value: Any,
        mode: str = "f",
        unit: Any = False,
        unit_min: float = 0,
        unit_max: float = 1,
    ) -> bool:
        """
        Store a new value on a node and notify the host.

        Returns True when the node existed and the host was notified.
        Never creates objects, frames or nodes.
        """
        object_id = self.resolver.resolve_object_id(object_name)
        found = self.store.find_node(object_id, frame_name, node_name)
        if not found:
            logger.debug(f"write({object_name}, {frame_name}, {node_name}) dropped: {found.reason}")
            return False

        data = found.value.data
        data.update(value, mode, unit, unit_min, unit_max)
        self.host.on_write(
            found.object_id, found.frame_id, found.node_id,
            data, self.store.objects, self.type_modules,
        )
        return True

    def _find_callbacks(self, object_name: str, frame_name: str, node_name: str) -> Lookup[CallbackEntry]:
        object_id = self.resolver.resolve_object_id(object_name)
        if object_id is None:
            return Lookup.miss("object id unresolved")
        return self.callbacks.find(
            object_id,
            compose_frame_id(object_id, frame_name),
            compose_node_id(object_id, frame_name, node_name),
        )

    def read_call(self, object_name: str, frame_name: str, node_name: str, data: Any) -> bool:
        """Deliver host data to the node's read callback, if any."""
        found = self._find_callbacks(object_name, frame_name, node_name)
        if not found or found.value.read_callback is None:
            logger.debug(f"No read callback for {object_name}/{frame_name}/{node_name}")
            return False
        found.value.read_callback(data)
        return True

    def connect_call(self, object_name: str, frame_name: str, node_name: str, data: Any) -> bool:
        """Deliver a connection event to the node's connection callback, if any."""
        found = self._find_callbacks(object_name, frame_name, node_name)
        if not found or found.value.connection_callback is None:
            logger.debug(f"No connection callback for {object_name}/{frame_name}/{node_name}")
            return False
        found.value.connection_callback(data)
        logger.debug(f"Connection callback called for {found.node_id}")
        return True

    def advertise_connection(
        self, object_name: str, frame_name: str, node_name: str, logic: bool = False
    ) -> Optional[AdvertiseConnectionMessage]:
        """Announce a connectable point to the host."""
        object_id = self.resolver.resolve_object_id(object_name)
        if object_id is None:
            logger.debug(f"advertise_connection({object_name}) dropped: object id unresolved")
            return None

        message = AdvertiseConnectionMessage(
            object=object_id,
            frame=compose_frame_id(object_id, frame_name),
            node=compose_node_id(object_id, frame_name, node_name),
            logic=logic,
            names=[object_name, node_name],
        )
        self.host.emit(message.to_message())
        return message
