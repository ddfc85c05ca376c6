"""
Hardware Interfaces Test Configuration
======================================

Shared fixtures: a resolver that knows a couple of objects, a host that
records everything it is told, and a wired registry.
"""

import os
import sys

import pytest

# Add repository root for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from hardware_interfaces import (
    HardwareConfig,
    HardwareInterfaces,
    HostBridge,
    LookupTableResolver,
)

LAMP_ID = "Lamp3f9a"
FAN_ID = "Fan81c2"


class RecordingHost(HostBridge):
    """Host double that keeps every call."""

    def __init__(self):
        self.writes = []
        self.messages = []
        self.persisted = []
        self.provisioned = []

    def on_write(self, object_id, frame_id, node_id, data, objects, type_modules):
        self.writes.append((object_id, frame_id, node_id, data, objects, type_modules))

    def emit(self, message):
        self.messages.append(message)

    def persist(self, object_id):
        self.persisted.append(object_id)

    def provision(self, object_name, frame_name):
        self.provisioned.append((object_name, frame_name))


@pytest.fixture
def lookup():
    """Host-owned name -> id table."""
    return {"Lamp": {"id": LAMP_ID}, "Fan": {"id": FAN_ID}}


@pytest.fixture
def resolver(lookup):
    return LookupTableResolver(lookup)


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def config():
    return HardwareConfig(debug=True)


@pytest.fixture
def hw(resolver, host, config):
    """Registry wired to the recording host."""
    return HardwareInterfaces(
        resolver=resolver,
        config=config,
        host=host,
        type_modules={"default": object()},
    )
