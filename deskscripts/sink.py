"""Switch the default PipeWire sink and move running streams onto it."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .exceptions import DeviceDumpError
from .process import CommandRunner, Runner, run_success

LOGGER = logging.getLogger("deskscripts.sink")

SINK_MEDIA_CLASS = "Audio/Sink"
DUMP_COMMAND = ("pw-dump",)
PACTL = "pactl"


class Props(BaseModel):
    """Node properties reported by ``pw-dump``."""

    media_class: Optional[str] = Field(None, alias="media.class")
    device_id: Optional[int] = Field(None, alias="device.id")
    node_description: Optional[str] = Field(None, alias="node.description")
    object_serial: Optional[int] = Field(None, alias="object.serial")
    api_alsa_path: Optional[str] = Field(None, alias="api.alsa.path")
    api_alsa_card: Optional[int] = Field(None, alias="api.alsa.card")
    api_alsa_card_name: Optional[str] = Field(None, alias="api.alsa.card.name")
    api_alsa_card_longname: Optional[str] = Field(None, alias="api.alsa.card.longname")

    model_config = ConfigDict(populate_by_name=True)


class Info(BaseModel):
    """Detailed info about a device."""

    props: Optional[Props] = None
    error: Optional[str] = None
    max_input_ports: Optional[int] = Field(None, alias="max-input-ports")
    max_output_ports: Optional[int] = Field(None, alias="max-output-ports")
    # e.g. ["input-ports", "output-ports", "state", "props", "params"]
    change_mask: list[str] = Field(default_factory=list, alias="change-mask")
    n_input_ports: Optional[int] = Field(None, alias="n-input-ports")
    n_output_ports: Optional[int] = Field(None, alias="n-output-ports")

    model_config = ConfigDict(populate_by_name=True)


class Device(BaseModel):
    """One object from the ``pw-dump`` output."""

    id: int
    device_type: str = Field(..., alias="type")
    version: Optional[int] = None
    permissions: list[str] = Field(default_factory=list)
    info: Optional[Info] = None

    model_config = ConfigDict(populate_by_name=True)


_DEVICE_LIST = TypeAdapter(list[Device])


class Target(str, enum.Enum):
    """Sink categories that can be switched to."""

    HDMI = "hdmi"
    BUILT_IN = "built-in"
    XONAR = "xonar"

    def matches(self, description: str) -> bool:
        if self is Target.HDMI:
            return "HDMI" in description
        if self is Target.BUILT_IN:
            return description.startswith("Built-in")
        return "Xonar" in description


@dataclass(frozen=True)
class SwitchResult:
    """The sink that was made default and the streams moved onto it."""

    device: Device
    serial: int
    description: str
    moved_streams: tuple[str, ...] = ()


def parse_devices(text: str) -> list[Device]:
    """Parse the JSON array printed by ``pw-dump``."""

    try:
        return _DEVICE_LIST.validate_json(text)
    except ValidationError as exc:
        LOGGER.error("Unexpected pw-dump output: %s", exc)
        raise DeviceDumpError(f"Could not parse pw-dump output: {exc}") from exc


def sink_description(device: Device) -> tuple[int, str] | None:
    """Return ``(serial, description)`` for audio sinks, ``None`` for anything else."""

    info = device.info
    if info is None or info.props is None:
        return None
    props = info.props
    if props.media_class != SINK_MEDIA_CLASS:
        return None
    if props.node_description is None or props.object_serial is None:
        return None
    return props.object_serial, props.node_description


def find_sink(devices: Iterable[Device], target: Target) -> tuple[Device, int, str] | None:
    """Return the first sink in dump order whose description matches *target*."""

    for device in devices:
        sink = sink_description(device)
        if sink is None:
            continue
        serial, description = sink
        LOGGER.debug("Sink %s: %s", serial, description)
        if target.matches(description):
            return device, serial, description
    return None


def parse_sink_input_ids(text: str) -> list[str]:
    """Return the stream ids from ``pactl list short sink-inputs`` output.

    Lines look like ``188\\t56\\t187\\tPipeWire float32le 2ch 48000Hz``; the
    id is the first field.
    """

    return [line.split("\t", 1)[0] for line in text.split("\n") if line.strip()]


def switch_sink(target: Target, *, runner: Runner | None = None) -> SwitchResult | None:
    """Make the sink matching *target* the default and move all streams to it.

    Returns ``None`` when no sink matches. Command failures propagate
    immediately; steps that already ran are not undone.
    """

    runner = runner or CommandRunner()

    dump = run_success(DUMP_COMMAND, runner=runner)
    found = find_sink(parse_devices(dump.stdout), target)
    if found is None:
        LOGGER.info("No sink matches target %s", target.value)
        return None
    device, serial, description = found

    run_success([PACTL, "set-default-sink", str(serial)], runner=runner)
    LOGGER.info("Default sink set to %s (%s)", serial, description)

    listing = run_success([PACTL, "list", "short", "sink-inputs"], runner=runner)
    stream_ids = parse_sink_input_ids(listing.stdout)

    for stream_id in stream_ids:
        run_success([PACTL, "move-sink-input", stream_id, str(serial)], runner=runner)
        LOGGER.debug("Moved sink input %s to %s", stream_id, serial)

    return SwitchResult(
        device=device,
        serial=serial,
        description=description,
        moved_streams=tuple(stream_ids),
    )


__all__ = [
    "Device",
    "Info",
    "Props",
    "SwitchResult",
    "Target",
    "find_sink",
    "parse_devices",
    "parse_sink_input_ids",
    "sink_description",
    "switch_sink",
]
