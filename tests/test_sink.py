from __future__ import annotations

import json

import pytest

from deskscripts import sink
from deskscripts.exceptions import CommandError, DeviceDumpError
from deskscripts.sink import (
    Target,
    find_sink,
    parse_devices,
    parse_sink_input_ids,
    sink_description,
    switch_sink,
)

DUMP = ("pw-dump",)
SINK_INPUTS = ("pactl", "list", "short", "sink-inputs")


def node(object_id: int, serial: int, description: str | None, media_class: str | None = "Audio/Sink") -> dict:
    props: dict[str, object] = {"object.serial": serial}
    if media_class is not None:
        props["media.class"] = media_class
    if description is not None:
        props["node.description"] = description
    return {
        "id": object_id,
        "type": "PipeWire:Interface:Node",
        "version": 3,
        "permissions": ["r", "w", "x", "m"],
        "info": {
            "max-input-ports": 65,
            "max-output-ports": 0,
            "change-mask": ["input-ports", "output-ports", "state", "props", "params"],
            "n-input-ports": 2,
            "n-output-ports": 2,
            "state": "suspended",
            "error": None,
            "props": props,
        },
    }


@pytest.fixture()
def devices_json() -> str:
    return json.dumps(
        [
            {"id": 0, "type": "PipeWire:Interface:Core", "version": 4, "permissions": ["r", "x"]},
            {"id": 30, "type": "PipeWire:Interface:Module", "version": 3, "permissions": ["r"], "info": {"name": "x"}},
            node(48, 1048, "Webcam Microphone", media_class="Audio/Source"),
            node(52, 1052, None),
            node(55, 1055, "GA102 High Definition Audio Controller Digital Stereo (HDMI)"),
            node(57, 1057, "Built-in Audio Analog Stereo"),
            node(59, 1059, "Xonar DX Analog Stereo"),
        ]
    )


def test_parse_devices(devices_json: str) -> None:
    devices = parse_devices(devices_json)

    assert len(devices) == 7
    assert devices[0].info is None
    assert devices[0].device_type == "PipeWire:Interface:Core"
    props = devices[4].info.props
    assert props.media_class == "Audio/Sink"
    assert props.object_serial == 1055
    assert devices[4].info.n_input_ports == 2
    assert devices[4].info.change_mask[0] == "input-ports"


@pytest.mark.parametrize("payload", ["not json", '{"id": 1}', '[{"type": "x"}]'])
def test_parse_devices_rejects_bad_dump(payload: str) -> None:
    with pytest.raises(DeviceDumpError):
        parse_devices(payload)


def test_sink_description_skips_incomplete_records(devices_json: str) -> None:
    devices = parse_devices(devices_json)

    assert sink_description(devices[0]) is None  # no info
    assert sink_description(devices[1]) is None  # no props
    assert sink_description(devices[2]) is None  # source
    assert sink_description(devices[3]) is None  # no description
    assert sink_description(devices[5]) == (1057, "Built-in Audio Analog Stereo")


@pytest.mark.parametrize(
    ("target", "serial"),
    [(Target.HDMI, 1055), (Target.BUILT_IN, 1057), (Target.XONAR, 1059)],
)
def test_find_sink(devices_json: str, target: Target, serial: int) -> None:
    found = find_sink(parse_devices(devices_json), target)
    assert found is not None
    assert found[1] == serial


def test_target_matching() -> None:
    assert Target.BUILT_IN.matches("Built-in Audio Analog Stereo")
    assert not Target.HDMI.matches("Built-in Audio Analog Stereo")
    assert not Target.BUILT_IN.matches("Speakers (Built-in)")
    assert Target.XONAR.matches("ASUS Xonar DX")


def test_find_sink_takes_first_match() -> None:
    devices = parse_devices(json.dumps([node(1, 101, "HDMI 1"), node(2, 102, "HDMI 2")]))
    assert find_sink(devices, Target.HDMI)[1] == 101


def test_find_sink_without_props_never_matches() -> None:
    record = node(1, 101, "HDMI 1")
    del record["info"]["props"]
    devices = parse_devices(json.dumps([record]))

    for target in Target:
        assert find_sink(devices, target) is None


def test_parse_sink_input_ids() -> None:
    output = "188\t56\t187\tPipeWire float32le 2ch 48000Hz\n\n  \n201\t56\t200\tPipeWire s16le 2ch 44100Hz\n"
    assert parse_sink_input_ids(output) == ["188", "201"]
    assert parse_sink_input_ids("") == []


def test_switch_sink_moves_streams(devices_json: str, fake_runner) -> None:
    fake_runner.outputs[DUMP] = devices_json
    fake_runner.outputs[SINK_INPUTS] = "188\t56\t187\tPipeWire float32le 2ch 48000Hz\n201\t56\t200\tx\n"

    result = switch_sink(Target.BUILT_IN, runner=fake_runner)

    assert result is not None
    assert result.serial == 1057
    assert result.description == "Built-in Audio Analog Stereo"
    assert result.moved_streams == ("188", "201")
    assert fake_runner.calls == [
        ["pw-dump"],
        ["pactl", "set-default-sink", "1057"],
        ["pactl", "list", "short", "sink-inputs"],
        ["pactl", "move-sink-input", "188", "1057"],
        ["pactl", "move-sink-input", "201", "1057"],
    ]


def test_switch_sink_not_found(fake_runner) -> None:
    fake_runner.outputs[DUMP] = json.dumps([node(57, 1057, "Built-in Audio Analog Stereo")])

    assert switch_sink(Target.XONAR, runner=fake_runner) is None
    assert fake_runner.calls == [["pw-dump"]]


def test_switch_sink_twice_is_stable(devices_json: str, fake_runner) -> None:
    fake_runner.outputs[DUMP] = devices_json

    first = switch_sink(Target.HDMI, runner=fake_runner)
    second = switch_sink(Target.HDMI, runner=fake_runner)

    assert first.serial == second.serial == 1055
    defaults = [call for call in fake_runner.calls if call[1:2] == ["set-default-sink"]]
    assert defaults == [["pactl", "set-default-sink", "1055"]] * 2


def test_switch_sink_stops_on_failure(devices_json: str, fake_runner) -> None:
    fake_runner.outputs[DUMP] = devices_json
    fake_runner.outputs[SINK_INPUTS] = "188\tx\n201\tx\n"
    fake_runner.fail("pactl", "move-sink-input", "188", "1059")

    with pytest.raises(CommandError):
        switch_sink(Target.XONAR, runner=fake_runner)

    assert fake_runner.calls[-1] == ["pactl", "move-sink-input", "188", "1059"]


def test_switch_sink_defaults_to_command_runner(monkeypatch: pytest.MonkeyPatch, fake_runner) -> None:
    fake_runner.outputs[DUMP] = "[]"
    monkeypatch.setattr(sink, "CommandRunner", lambda: fake_runner)

    assert switch_sink(Target.HDMI) is None
    assert fake_runner.calls == [["pw-dump"]]
