"""
Tests for write delivery, callback registration and host-invoked calls.
"""

from hardware_interfaces import (
    CallbackHost, CallbackRegistry, HardwareAdapter, HardwareConfig, HardwareInterfaces,
)

from conftest import LAMP_ID

MAIN_ID = LAMP_ID + "Main"
BRIGHTNESS_ID = MAIN_ID + "brightness"


class TestWrite:
    """Tests for write()."""

    def test_write_updates_node_data(self, hw):
        hw.add_node("Lamp", "Main", "brightness", "default")

        assert hw.write("Lamp", "Main", "brightness", 0.5) is True

        data = hw.objects[LAMP_ID].frames[MAIN_ID].nodes[BRIGHTNESS_ID].data
        assert data.value == 0.5
        assert data.mode == "f"
        assert data.unit is False
        assert data.unit_min == 0
        assert data.unit_max == 1

    def test_write_passes_every_field(self, hw):
        node = hw.add_node("Lamp", "Main", "brightness")
        hw.write("Lamp", "Main", "brightness", 42, mode="d", unit="lux", unit_min=0, unit_max=100)
        assert (node.data.value, node.data.mode, node.data.unit, node.data.unit_max) == (42, "d", "lux", 100)

    def test_write_replaces_data_in_place(self, hw):
        node = hw.add_node("Lamp", "Main", "brightness")
        data = node.data
        hw.write("Lamp", "Main", "brightness", 1)
        assert node.data is data

    def test_write_notifies_host(self, hw, host):
        node = hw.add_node("Lamp", "Main", "brightness")
        hw.write("Lamp", "Main", "brightness", 0.5)

        assert len(host.writes) == 1
        object_id, frame_id, node_id, data, objects, type_modules = host.writes[0]
        assert (object_id, frame_id, node_id) == (LAMP_ID, MAIN_ID, BRIGHTNESS_ID)
        assert data is node.data
        assert objects is hw.objects
        assert type_modules is hw.type_modules

    def test_unresolved_object_is_noop(self, hw, host):
        assert hw.write("Toaster", "Main", "heat", 1) is False
        assert hw.objects == {}
        assert host.writes == []

    def test_unknown_node_does_not_create_entries(self, hw, host):
        hw.add_node("Lamp", "Main", "brightness")

        assert hw.write("Lamp", "Main", "color", 1) is False
        assert hw.write("Lamp", "Aux", "brightness", 1) is False

        assert list(hw.get_all_nodes("Lamp")) == [BRIGHTNESS_ID]
        assert list(hw.objects[LAMP_ID].frames) == [MAIN_ID]
        assert host.writes == []

    def test_setup_wires_plain_functions(self):
        writes, messages = [], []
        objects, lookup = {}, {"Lamp": {"id": LAMP_ID}}
        hw = HardwareInterfaces.setup(
            objects=objects,
            object_lookup=lookup,
            config=HardwareConfig(),
            type_modules={},
            block_modules={"delay": object()},
            write_callback=lambda *args: writes.append(args),
            action_callback=messages.append,
        )
        hw.add_node("Lamp", "Main", "brightness")
        hw.write("Lamp", "Main", "brightness", 0.5)
        hw.advertise_connection("Lamp", "Main", "brightness")

        assert isinstance(hw.host, CallbackHost)
        assert writes[0][2] == BRIGHTNESS_ID
        assert writes[0][4] is objects
        assert messages[0]["advertiseConnection"]["node"] == BRIGHTNESS_ID
        assert "delay" in hw.block_modules


class TestReadCall:

    def test_read_listener_receives_data_once(self, hw):
        calls = []
        hw.add_read_listener("Lamp", "Main", "brightness", calls.append)

        assert hw.read_call("Lamp", "Main", "brightness", {"value": 1}) is True

        assert calls == [{"value": 1}]

    def test_last_registration_wins(self, hw):
        first, second = [], []
        hw.add_read_listener("Lamp", "Main", "brightness", first.append)
        hw.add_read_listener("Lamp", "Main", "brightness", second.append)

        hw.read_call("Lamp", "Main", "brightness", 3)

        assert first == []
        assert second == [3]

    def test_listener_may_outlive_node(self, hw):
        """Callbacks are not tied to the store."""
        calls = []
        hw.add_node("Lamp", "Main", "brightness")
        hw.add_read_listener("Lamp", "Main", "brightness", calls.append)
        hw.remove_node("Lamp", "Main", "brightness")

        hw.read_call("Lamp", "Main", "brightness", 1)

        assert calls == [1]

    def test_missing_listener_is_noop(self, hw):
        assert hw.read_call("Lamp", "Main", "brightness", 1) is False
        assert hw.read_call("Toaster", "Main", "heat", 1) is False

    def test_unresolved_registration_is_dropped(self, hw):
        assert hw.add_read_listener("Toaster", "Main", "heat", print) is False
        assert len(hw.callbacks) == 0

    def test_remove_read_listeners_drops_frame(self, hw):
        calls = []
        hw.add_read_listener("Lamp", "Main", "a", calls.append)
        hw.add_read_listener("Lamp", "Main", "b", calls.append)
        hw.add_read_listener("Lamp", "Aux", "c", calls.append)

        removed = hw.remove_read_listeners("Lamp", "Main")

        assert sorted(removed) == [MAIN_ID + "a", MAIN_ID + "b"]
        hw.read_call("Lamp", "Main", "a", 1)
        hw.read_call("Lamp", "Aux", "c", 2)
        assert calls == [2]

    def test_remove_read_listeners_unknown(self, hw):
        assert hw.remove_read_listeners("Lamp", "Main") == []
        assert hw.remove_read_listeners("Toaster", "Main") == []


class TestConnectCall:

    def test_connection_listener(self, hw):
        calls = []
        hw.add_connection_listener("Lamp", "Main", "brightness", calls.append)

        assert hw.connect_call("Lamp", "Main", "brightness", {"link": "l1"}) is True

        assert calls == [{"link": "l1"}]

    def test_read_and_connection_share_entry(self, hw):
        reads, connects = [], []
        hw.add_read_listener("Lamp", "Main", "brightness", reads.append)
        hw.add_connection_listener("Lamp", "Main", "brightness", connects.append)

        hw.read_call("Lamp", "Main", "brightness", "r")
        hw.connect_call("Lamp", "Main", "brightness", "c")

        assert reads == ["r"]
        assert connects == ["c"]
        assert len(hw.callbacks) == 1

    def test_no_connection_callback(self, hw):
        hw.add_read_listener("Lamp", "Main", "brightness", print)
        assert hw.connect_call("Lamp", "Main", "brightness", {}) is False

    def test_connection_survives_read_removal(self, hw):
        connects = []
        hw.add_read_listener("Lamp", "Main", "brightness", print)
        hw.add_connection_listener("Lamp", "Main", "brightness", connects.append)

        hw.remove_read_listeners("Lamp", "Main")

        assert hw.read_call("Lamp", "Main", "brightness", 1) is False
        assert hw.connect_call("Lamp", "Main", "brightness", 1) is True
        assert connects == [1]


class TestAdvertiseConnection:

    def test_message_shape(self, hw, host):
        hw.advertise_connection("Lamp", "Main", "brightness")

        assert host.messages == [{
            "advertiseConnection": {
                "object": LAMP_ID,
                "frame": MAIN_ID,
                "node": BRIGHTNESS_ID,
                "logic": False,
                "names": ["Lamp", "brightness"],
            }
        }]

    def test_logic_flag(self, hw, host):
        message = hw.advertise_connection("Lamp", "Main", "brightness", logic=True)
        assert message.logic is True
        assert host.messages[0]["advertiseConnection"]["logic"] is True

    def test_unresolved_object(self, hw, host):
        assert hw.advertise_connection("Toaster", "Main", "heat") is None
        assert host.messages == []


class TestCallbackRegistry:

    def test_find(self):
        registry = CallbackRegistry()
        registry.add_read_listener("o", "oF", "oFa", "a", print)

        assert registry.find("o", "oF", "oFa").value.name == "a"
        assert registry.find("o", "oF", "oFb").reason == "no callbacks registered"
        assert registry.find(None, None, None).reason == "object id unresolved"


class RecordingAdapter(HardwareAdapter):
    name = "recorder"

    def __init__(self):
        self.reads = []
        self.connects = []

    def on_read(self, data):
        self.reads.append(data)

    def on_connect(self, data):
        self.connects.append(data)


class TestAdapterListen:

    def test_listen_routes_to_adapter(self, hw):
        adapter = RecordingAdapter()
        assert hw.listen(adapter, "Lamp", "Main", "brightness") is True

        hw.read_call("Lamp", "Main", "brightness", 0.1)
        hw.connect_call("Lamp", "Main", "brightness", "link")

        assert adapter.reads == [0.1]
        assert adapter.connects == ["link"]

    def test_listen_unresolved(self, hw):
        assert hw.listen(RecordingAdapter(), "Toaster", "Main", "heat") is False
