"""
Hardware Interfaces
===================

Registry and dispatch layer between hardware adapters and a host engine.

Architecture:
    ObjectStore       - object -> frame -> node hierarchy and node data
    ShadowTable       - nodes advertised since the last prune
    CallbackRegistry  - per-node read/connection callbacks
    Dispatcher        - adapter writes in, host calls out
    LifecycleManager  - reset sweep, reset/shutdown hooks

Adapters advertise every node they expose with add_node(), then call
clear_object() once; anything not re-advertised is pruned.
"""

from hardware_interfaces.models.node import Node, NodeData, ShadowEntry
from hardware_interfaces.models.frame import Frame, HardwareObject
from hardware_interfaces.models.lookup import Lookup, CallbackEntry

from hardware_interfaces.config import HardwareConfig, configure_logging
from hardware_interfaces.identifiers import (
    IdentifierResolver, LookupTableResolver, compose_frame_id, compose_node_id,
)
from hardware_interfaces.host import HostBridge, CallbackHost, NullHost, HardwareAdapter
from hardware_interfaces.messages import AdvertiseConnectionMessage, ReloadObjectMessage
from hardware_interfaces.store import ObjectStore, ShadowTable
from hardware_interfaces.callbacks import CallbackRegistry
from hardware_interfaces.dispatcher import Dispatcher
from hardware_interfaces.lifecycle import LifecycleManager, HookReport, HookFailure
from hardware_interfaces.registry import HardwareInterfaces
from hardware_interfaces.utils import map_range

__all__ = [
    # Models
    "Node", "NodeData", "ShadowEntry",
    "Frame", "HardwareObject",
    "Lookup", "CallbackEntry",
    # Wiring
    "HardwareConfig", "configure_logging",
    "IdentifierResolver", "LookupTableResolver", "compose_frame_id", "compose_node_id",
    "HostBridge", "CallbackHost", "NullHost", "HardwareAdapter",
    "AdvertiseConnectionMessage", "ReloadObjectMessage",
    # Core
    "ObjectStore", "ShadowTable",
    "CallbackRegistry",
    "Dispatcher",
    "LifecycleManager", "HookReport", "HookFailure",
    "HardwareInterfaces",
    "map_range",
]

__version__ = "0.1.0"
