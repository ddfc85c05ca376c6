"""
Tests for the registry data models.
"""

import pytest

from hardware_interfaces import Frame, HardwareObject, Lookup, Node, NodeData, CallbackEntry


class TestNodeData:
    """Tests for NodeData."""

    def test_defaults(self):
        data = NodeData()
        assert data.value == 0
        assert data.mode == "f"
        assert data.unit is False
        assert data.unit_min == 0
        assert data.unit_max == 1

    def test_update_replaces_every_field(self):
        data = NodeData(value=3, mode="b", unit="C", unit_min=-5, unit_max=5)
        data.update(0.25)
        assert data.value == 0.25
        assert data.mode == "f"
        assert data.unit is False
        assert data.unit_min == 0
        assert data.unit_max == 1

    def test_dict_uses_host_field_names(self):
        data = NodeData(value=1, unit_min=2, unit_max=4).to_dict()
        assert data["unitMin"] == 2
        assert data["unitMax"] == 4


class TestNode:
    """Tests for Node."""

    def test_display_name_prefers_rename_text(self):
        node = Node(name="brightness")
        assert node.display_name == "brightness"
        node.text = "Dimmer"
        assert node.display_name == "Dimmer"

    def test_adapter_ownership(self):
        assert Node(type="default").is_adapter_owned
        assert not Node(type="logic").is_adapter_owned
        assert not Node(type="default", frame_bound=True).is_adapter_owned

    def test_from_dict_restores_layout_and_data(self):
        node = Node.from_dict({
            "id": "LampMainbrightness",
            "name": "brightness",
            "x": -12,
            "y": 40,
            "frameSizeX": 50,
            "data": {"value": 0.7, "mode": "f"},
        })
        assert node.x == -12
        assert node.y == 40
        assert node.frame_size_x == 50
        assert node.frame_size_y == 100
        assert node.data.value == 0.7


class TestFrame:
    """Tests for Frame."""

    def test_defaults(self):
        frame = Frame(id="LampMain", name="Main")
        assert frame.scale == 1
        assert frame.matrix == []
        assert frame.location == "local"
        assert frame.src == "editor"
        assert not frame.visible
        assert frame.nodes == {}
        assert frame.links == {}

    def test_rejects_unknown_location(self):
        with pytest.raises(ValueError):
            Frame(location="remote")

    def test_rejects_partial_matrix(self):
        with pytest.raises(ValueError):
            Frame(matrix=[1.0, 0.0, 0.0])

    def test_accepts_full_matrix(self):
        identity = [1.0 if i % 5 == 0 else 0.0 for i in range(16)]
        frame = Frame(matrix=identity, location="global")
        assert len(frame.matrix) == 16


class TestHardwareObject:
    """Tests for HardwareObject."""

    def test_iter_nodes_walks_every_frame(self):
        obj = HardwareObject(object_id="Lamp1", name="Lamp")
        obj.frames["Lamp1Main"] = Frame(id="Lamp1Main", nodes={"a": Node(id="a")})
        obj.frames["Lamp1Aux"] = Frame(id="Lamp1Aux", nodes={"b": Node(id="b"), "c": Node(id="c")})

        ids = sorted(node.id for _, node in obj.iter_nodes())
        assert ids == ["a", "b", "c"]
        assert obj.node_count() == 3

    def test_active_follows_deactivated_flag(self):
        obj = HardwareObject()
        assert obj.active
        obj.deactivated = True
        assert not obj.active

    def test_json_keeps_frames_and_nodes(self):
        obj = HardwareObject(object_id="Lamp1", name="Lamp")
        obj.frames["Lamp1Main"] = Frame(id="Lamp1Main", name="Main", nodes={"n": Node(id="n", name="n")})

        restored = HardwareObject.from_json(obj.to_json())
        assert restored.name == "Lamp"
        assert restored.frames["Lamp1Main"].nodes["n"].name == "n"


class TestLookup:
    """Tests for Lookup results."""

    def test_hit_is_truthy(self):
        found = Lookup.hit("value", object_id="o")
        assert found
        assert found.found
        assert found.object_id == "o"

    def test_miss_is_falsy_with_reason(self):
        missed = Lookup.miss("node not stored", node_id="n")
        assert not missed
        assert missed.reason == "node not stored"
        assert missed.node_id == "n"

    def test_callback_entry_empty(self):
        entry = CallbackEntry(node_id="n")
        assert entry.is_empty
        entry.read_callback = print
        assert not entry.is_empty
