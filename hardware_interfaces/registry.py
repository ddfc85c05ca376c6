"""
Hardware Interfaces Registry
============================

The API hardware adapters program against.

One `HardwareInterfaces` instance per process holds the object store,
the shadow advertisement table, the callback registry and the lifecycle
hooks. The host wires it once with `setup()`; adapters then:

    hw.add_node("Lamp", "Main", "brightness", "default")   # advertise
    hw.clear_object("Lamp", "Main")                         # prune the rest
    hw.add_read_listener("Lamp", "Main", "brightness", on_value)
    hw.write("Lamp", "Main", "brightness", 0.5)             # push data

Lookups never raise: unresolved names are silent no-ops for writes and
registrations and empty containers for reads.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from hardware_interfaces.callbacks import CallbackRegistry
from hardware_interfaces.config import HardwareConfig
from hardware_interfaces.dispatcher import Dispatcher
from hardware_interfaces.host import (
    HostBridge, NullHost, CallbackHost, HardwareAdapter,
    WriteCallback, ActionCallback, PersistCallback, ProvisionCallback,
)
from hardware_interfaces.identifiers import (
    IdentifierResolver, LookupTableResolver, compose_frame_id, compose_node_id,
)
from hardware_interfaces.lifecycle import LifecycleManager, HookReport, RESET, SHUTDOWN
from hardware_interfaces.messages import AdvertiseConnectionMessage, ReloadObjectMessage
from hardware_interfaces.models.frame import HardwareObject
from hardware_interfaces.models.lookup import Callback
from hardware_interfaces.models.node import Node, DEFAULT_TYPE
from hardware_interfaces.store import ObjectStore, ShadowTable
from hardware_interfaces.utils import map_range

logger = logging.getLogger(__name__)


class HardwareInterfaces:
    """Registry and dispatch layer between hardware adapters and the host."""

    def __init__(
        self,
        objects: Optional[Dict[str, HardwareObject]] = None,
        resolver: Optional[IdentifierResolver] = None,
        config: Optional[HardwareConfig] = None,
        host: Optional[HostBridge] = None,
        type_modules: Optional[Dict[str, Any]] = None,
        block_modules: Optional[Dict[str, Any]] = None,
        node_factory: Callable[[], Node] = Node,
    ):
        self.config = config or HardwareConfig()
        self.resolver: IdentifierResolver = resolver or LookupTableResolver()
        self.host: HostBridge = host or NullHost()
        self.block_modules: Dict[str, Any] = block_modules if block_modules is not None else {}

        self.store = ObjectStore(
            objects=objects,
            node_factory=node_factory,
            random_placement=self.config.random_placement,
        )
        self.shadow = ShadowTable()
        self.callbacks = CallbackRegistry()
        self.dispatcher = Dispatcher(
            store=self.store,
            callbacks=self.callbacks,
            resolver=self.resolver,
            host=self.host,
            type_modules=type_modules,
        )
        self.lifecycle = LifecycleManager(
            store=self.store,
            readvertise_node=self.readvertise_node,
            clear_object=self.clear_object,
        )

    @classmethod
    def setup(
        cls,
        objects: Dict[str, HardwareObject],
        object_lookup: Dict[str, Any],
        config: HardwareConfig,
        type_modules: Optional[Dict[str, Any]] = None,
        block_modules: Optional[Dict[str, Any]] = None,
        write_callback: Optional[WriteCallback] = None,
        node_factory: Callable[[], Node] = Node,
        action_callback: Optional[ActionCallback] = None,
        persist_callback: Optional[PersistCallback] = None,
        provision_callback: Optional[ProvisionCallback] = None,
        base_dir: Optional[Union[str, Path]] = None,
    ) -> HardwareInterfaces:
        """
        Host-side wiring from plain tables and functions.

        Adapters never call this; the host builds the instance once at
        startup and hands it to each adapter. `base_dir` overrides the
        config's object directory and is handed to the resolver.
        """
        if base_dir is not None:
            config.base_dir = Path(base_dir)
        host = CallbackHost(
            write_callback=write_callback,
            action_callback=action_callback,
            persist_callback=persist_callback,
            provision_callback=provision_callback,
        )
        logger.debug(f"Wiring hardware interfaces ({len(objects)} objects)")
        return cls(
            objects=objects,
            resolver=LookupTableResolver(object_lookup),
            config=config,
            host=host,
            type_modules=type_modules,
            block_modules=block_modules,
            node_factory=node_factory,
        )

    @property
    def objects(self) -> Dict[str, HardwareObject]:
        return self.store.objects

    @property
    def type_modules(self) -> Dict[str, Any]:
        return self.dispatcher.type_modules

    # ─────────────────────────────────────────────────────────────
    # Node registry
    # ─────────────────────────────────────────────────────────────

    def _target_id(self, object_name: str) -> Optional[str]:
        return self.resolver.resolve_target_id(object_name, self.config.base_dir)

    def add_node(
        self, object_name: str, frame_name: str, node_name: str, node_type: str = DEFAULT_TYPE
    ) -> Optional[Node]:
        """
        Advertise a node.

        Creates the object, frame and node as needed and records the node
        in the shadow table. Calling it again with the same arguments
        leaves position and size untouched.
        """
        self.host.provision(object_name, frame_name)

        object_id = self._target_id(object_name)
        if object_id is None:
            logger.debug(f"add_node({object_name}, {frame_name}, {node_name}) dropped: object id unresolved")
            return None
        return self._advertise(object_id, object_name, frame_name, node_name, node_type)

    def readvertise_node(
        self, object_id: str, frame_name: str, node_name: str, node_type: str = DEFAULT_TYPE
    ) -> Node:
        """
        Advertise a node of an already stored object by its id.

        The object's display name is kept as stored, even when it no
        longer resolves.
        """
        obj = self.store.objects[object_id]
        self.host.provision(obj.name, frame_name)
        return self._advertise(object_id, obj.name, frame_name, node_name, node_type)

    def _advertise(
        self, object_id: str, object_name: str, frame_name: str, node_name: str, node_type: str
    ) -> Node:
        node = self.store.add_node(
            object_id, object_name, frame_name, node_name, node_type,
            developer=self.config.developer,
        )
        self.shadow.advertise(
            object_id, compose_frame_id(object_id, frame_name), node.id, node_name, node_type
        )
        logger.debug(f"Added node {node_name} ({node_type}) to {object_id}/{frame_name}")
        return node

    def clear_object(self, object_name: str, frame_name: Optional[str] = None) -> List[str]:
        """
        Prune nodes missing from the current advertisement pass.

        Sweeps the named frame, or every frame of the object. Logic and
        frame-bound nodes are kept. Links are left as they are. Returns
        the removed node ids.

        A prune closes the pass: the advertised set stays current until
        the next `add_node` on that frame starts a new one, so clearing
        again without advertising removes nothing.
        """
        object_id = self._target_id(object_name)
        if object_id is None:
            logger.debug(f"clear_object({object_name}) dropped: object id unresolved")
            return []

        removed: List[str] = []
        for frame in self.store.iter_frames(object_id, frame_name):
            for node_id, node in list(frame.nodes.items()):
                if not node.is_adapter_owned:
                    continue
                if not self.shadow.is_advertised(object_id, frame.id, node_id):
                    logger.info(f"Deleting stale node {node_id}")
                    del frame.nodes[node_id]
                    removed.append(node_id)
            self.shadow.close(object_id, frame.id)

        logger.debug(f"Object {object_id} cleared ({len(removed)} removed)")
        return removed

    def begin_advertisement(self, object_name: str, frame_name: Optional[str] = None) -> bool:
        """
        Start an empty advertisement pass.

        The next `clear_object` keeps only nodes advertised after this
        call, including none at all.
        """
        object_id = self._target_id(object_name)
        if object_id is None:
            return False
        if frame_name is None:
            self.shadow.clear(object_id)
        else:
            self.shadow.clear(object_id, compose_frame_id(object_id, frame_name))
        return True

    def remove_node(self, object_name: str, frame_name: str, node_name: str) -> bool:
        object_id = self._target_id(object_name)
        if object_id is None:
            return False
        self.shadow.discard(
            object_id,
            compose_frame_id(object_id, frame_name),
            compose_node_id(object_id, frame_name, node_name),
        )
        return self.store.remove_node(object_id, frame_name, node_name)

    def remove_all_nodes(self, object_name: str, frame_name: Optional[str] = None) -> List[str]:
        object_id = self._target_id(object_name)
        if object_id is None:
            return []
        if frame_name is None:
            self.shadow.clear(object_id)
        else:
            self.shadow.clear(object_id, compose_frame_id(object_id, frame_name))
        return self.store.remove_all_nodes(object_id, frame_name)

    def rename_node(
        self, object_name: str, frame_name: str, old_node_name: str, new_node_name: str
    ) -> bool:
        """Show a node under a new name. Its id does not change."""
        object_id = self._target_id(object_name)
        found = self.store.find_node(object_id, frame_name, old_node_name)
        if not found:
            logger.debug(f"rename_node({object_name}, {old_node_name}) dropped: {found.reason}")
            return False

        found.value.text = new_node_name
        self.host.emit(ReloadObjectMessage(object=object_id, frame=found.frame_id).to_message())
        return True

    def move_node(self, object_name: str, frame_name: str, node_name: str, x: int, y: int) -> bool:
        object_id = self._target_id(object_name)
        found = self.store.find_node(object_id, frame_name, node_name)
        if not found:
            return False
        found.value.x = x
        found.value.y = y
        logger.debug(f"Moved node {node_name} to ({x}, {y})")
        return True

    def get_all_nodes(self, object_name: str, frame_name: Optional[str] = None) -> Dict[str, Node]:
        object_id = self._target_id(object_name)
        nodes: Dict[str, Node] = {}
        for frame in self.store.iter_frames(object_id, frame_name):
            nodes.update(frame.nodes)
        return nodes

    def get_all_links_to_nodes(self, object_name: str, frame_name: Optional[str] = None) -> Dict[str, Any]:
        object_id = self._target_id(object_name)
        links: Dict[str, Any] = {}
        for frame in self.store.iter_frames(object_id, frame_name):
            links.update(frame.links)
        return links

    def _set_deactivated(self, object_name: str, deactivated: bool) -> bool:
        found = self.store.find_object(self._target_id(object_name))
        if not found:
            return False
        found.value.deactivated = deactivated
        return True

    def activate(self, object_name: str) -> bool:
        return self._set_deactivated(object_name, False)

    def deactivate(self, object_name: str) -> bool:
        logger.debug(f"Deactivating {object_name}")
        return self._set_deactivated(object_name, True)

    def reload_node_ui(self, object_name: str) -> bool:
        """Ask the host UI to reload the object and persist it."""
        object_id = self._target_id(object_name)
        if object_id is None:
            return False
        self.host.emit(ReloadObjectMessage(object=object_id).to_message())
        self.host.persist(object_id)
        return True

    def get_object_id_from_object_name(self, object_name: str) -> Optional[str]:
        return self._target_id(object_name)

    def enable_developer_ui(self, developer: bool) -> None:
        """Toggle developer mode globally and on every stored object."""
        self.config.developer = developer
        for obj in self.store.objects.values():
            obj.developer = developer

    def get_debug(self) -> bool:
        return self.config.debug

    map = staticmethod(map_range)

    # ─────────────────────────────────────────────────────────────
    # Callbacks
    # ─────────────────────────────────────────────────────────────

    def _callback_ids(self, object_name: str, frame_name: str, node_name: str):
        object_id = self.resolver.resolve_object_id(object_name)
        if object_id is None:
            return None
        return (
            object_id,
            compose_frame_id(object_id, frame_name),
            compose_node_id(object_id, frame_name, node_name),
        )

    def add_read_listener(self, object_name: str, frame_name: str, node_name: str, callback: Callback) -> bool:
        ids = self._callback_ids(object_name, frame_name, node_name)
        if ids is None:
            logger.debug(f"add_read_listener({object_name}) dropped: object id unresolved")
            return False
        self.callbacks.add_read_listener(*ids, node_name, callback)
        return True

    def add_connection_listener(
        self, object_name: str, frame_name: str, node_name: str, callback: Callback
    ) -> bool:
        ids = self._callback_ids(object_name, frame_name, node_name)
        if ids is None:
            logger.debug(f"add_connection_listener({object_name}) dropped: object id unresolved")
            return False
        self.callbacks.add_connection_listener(*ids, node_name, callback)
        return True

    def remove_read_listeners(self, object_name: str, frame_name: str) -> List[str]:
        object_id = self.resolver.resolve_object_id(object_name)
        if object_id is None:
            return []
        return self.callbacks.remove_read_listeners(object_id, compose_frame_id(object_id, frame_name))

    # ─────────────────────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────────────────────

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
        return self.dispatcher.write(
            object_name, frame_name, node_name, value, mode, unit, unit_min, unit_max
        )

    def read_call(self, object_name: str, frame_name: str, node_name: str, data: Any) -> bool:
        return self.dispatcher.read_call(object_name, frame_name, node_name, data)

    def connect_call(self, object_name: str, frame_name: str, node_name: str, data: Any) -> bool:
        return self.dispatcher.connect_call(object_name, frame_name, node_name, data)

    def advertise_connection(
        self, object_name: str, frame_name: str, node_name: str, logic: bool = False
    ) -> Optional[AdvertiseConnectionMessage]:
        return self.dispatcher.advertise_connection(object_name, frame_name, node_name, logic)

    # ─────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────

    def add_event_listener(self, kind: str, callback: Callable[[], Any]) -> None:
        self.lifecycle.add_event_listener(kind, callback)

    def register_adapter(self, adapter: HardwareAdapter) -> None:
        """Hook an adapter's reset and shutdown capabilities."""
        self.lifecycle.add_event_listener(RESET, adapter.on_reset)
        self.lifecycle.add_event_listener(SHUTDOWN, adapter.on_shutdown)
        logger.info(f"Registered adapter {adapter.name}")

    def listen(self, adapter: HardwareAdapter, object_name: str, frame_name: str, node_name: str) -> bool:
        """Route a node's read and connection calls to an adapter."""
        if not self.add_read_listener(object_name, frame_name, node_name, adapter.on_read):
            return False
        return self.add_connection_listener(object_name, frame_name, node_name, adapter.on_connect)

    def reset(self) -> HookReport:
        return self.lifecycle.reset()

    def shutdown(self) -> HookReport:
        return self.lifecycle.shutdown()
