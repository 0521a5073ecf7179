"""Keyboard lighting controller: packet builders and the device handle."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import BinaryIO, Iterable

VENDOR_ID = 0x187C
PRODUCT_IDS = frozenset({0x0551, 0x0550})
HIDRAW_SYSFS_ROOT = "/sys/class/hidraw"
PACKET_SIZE = 33

PREAMBLE = 0x03
REQUEST = 0x20
ANIMATION = 0x21
ZONE_SELECT = 0x23
ADD_ACTION = 0x24
SET_DIM = 0x26

BRIGHTNESS_OFF = 0x64
BRIGHTNESS_DIM = 0x32
BRIGHTNESS_FULL = 0x00


class Zone(IntEnum):
    """Keyboard lighting zones."""

    LEFT = 0x00
    MIDDLE_LEFT = 0x01
    MIDDLE_RIGHT = 0x02
    RIGHT = 0x03


ZONE_ALL = (Zone.LEFT, Zone.MIDDLE_LEFT, Zone.MIDDLE_RIGHT, Zone.RIGHT)


class Action(IntEnum):
    """Kinds of animation actions."""

    COLOR = 0x00
    PULSE = 0x01
    MORPH = 0x02


class Request(IntEnum):
    """Information that can be requested from the controller."""

    FIRMWARE_VERSION = 0x00
    STATUS = 0x01
    ELC_CONFIG = 0x02
    ANIMATION_COUNT = 0x03


class AnimationCommand(IntEnum):
    """Animation sub-commands."""

    CONFIG_START = 0x0001
    CONFIG_SAVE = 0x0002
    CONFIG_PLAY = 0x0003
    REMOVE = 0x0004
    PLAY = 0x0005
    SET_DEFAULT = 0x0006
    SET_STARTUP = 0x0007


class DeviceError(RuntimeError):
    """Raised when the lighting device cannot be found or used."""


def _u16(value: int) -> tuple[int, int]:
    return (value >> 8) & 0xFF, value & 0xFF


def _parse_hid_id(uevent: str) -> tuple[int, int] | None:
    for line in uevent.splitlines():
        key, _, value = line.partition("=")
        if key.strip() == "HID_ID":
            parts = value.strip().split(":")
            if len(parts) != 3:
                return None
            try:
                return int(parts[1], 16), int(parts[2], 16)
            except ValueError:
                return None
    return None


def find_device_path(sysfs_root=HIDRAW_SYSFS_ROOT) -> Path:
    """Return the /dev node of the first matching lighting controller."""
    root = Path(sysfs_root)
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        raise DeviceError(f"get device list: {exc}") from exc
    for entry in entries:
        try:
            uevent = (entry / "device" / "uevent").read_text()
        except OSError:
            continue
        ids = _parse_hid_id(uevent)
        if ids is None:
            continue
        vendor, product = ids
        if vendor == VENDOR_ID and product in PRODUCT_IDS:
            return Path("/dev") / entry.name
    raise DeviceError("find device")


def request_packet(kind) -> bytes:
    """Build a request packet."""
    return bytes((PREAMBLE, REQUEST, int(kind) & 0xFF))


def animation_packet(command, animation_id) -> bytes:
    """Build an animation command packet."""
    return bytes((PREAMBLE, ANIMATION, *_u16(int(command)), *_u16(animation_id)))


def zone_select_packet(loop, zones: Iterable[int]) -> bytes:
    """Build a zone selection packet."""
    zone_bytes = [int(zone) & 0xFF for zone in zones]
    return bytes(
        (PREAMBLE, ZONE_SELECT, loop & 0xFF, *_u16(len(zone_bytes)), *zone_bytes)
    )


def add_action_packet(action, duration, tempo, color) -> bytes:
    """Build a packet adding one action to the current animation."""
    return bytes(
        (
            PREAMBLE,
            ADD_ACTION,
            int(action) & 0xFF,
            *_u16(duration),
            *_u16(tempo),
            (color >> 16) & 0xFF,
            (color >> 8) & 0xFF,
            color & 0xFF,
        )
    )


def set_dim_packet(dim, zones: Iterable[int]) -> bytes:
    """Build a packet setting the dim level of the given zones."""
    zone_bytes = [int(zone) & 0xFF for zone in zones]
    return bytes((PREAMBLE, SET_DIM, dim & 0xFF, *_u16(len(zone_bytes)), *zone_bytes))


class LightDevice:
    """An open lighting controller node; packets go out while acquired."""

    def __init__(self, path):
        self.path = Path(path)
        try:
            self._handle: BinaryIO | None = open(self.path, "r+b", buffering=0)
        except OSError as exc:
            raise DeviceError(f"open device: {exc}") from exc
        self._acquired = False

    @classmethod
    def open(cls, sysfs_root=HIDRAW_SYSFS_ROOT) -> "LightDevice":
        """Find the controller and open it."""
        return cls(find_device_path(sysfs_root))

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def acquired(self) -> bool:
        return self._acquired

    def _require_open(self) -> BinaryIO:
        if self._handle is None:
            raise DeviceError("device not opened")
        return self._handle

    def _require_acquired(self) -> BinaryIO:
        handle = self._require_open()
        if not self._acquired:
            raise DeviceError("device not acquired")
        return handle

    def acquire(self) -> None:
        self._require_open()
        self._acquired = True

    def release(self) -> None:
        self._require_open()
        self._acquired = False

    def close(self) -> None:
        handle = self._require_open()
        self.release()
        handle.close()
        self._handle = None

    def send(self, data) -> None:
        """Send one packet, zero-padded to the report size."""
        handle = self._require_acquired()
        payload = bytes(data)
        if len(payload) > PACKET_SIZE:
            raise ValueError(
                f"packet of {len(payload)} bytes exceeds {PACKET_SIZE} bytes"
            )
        try:
            written = handle.write(payload.ljust(PACKET_SIZE, b"\0"))
        except OSError as exc:
            raise DeviceError(f"couldn't write full packet: {exc}") from exc
        if written != PACKET_SIZE:
            raise DeviceError("couldn't write full packet")

    def receive(self, length=PACKET_SIZE) -> bytes:
        """Read one report and return at most ``length`` bytes of it."""
        handle = self._require_acquired()
        try:
            buffer = handle.read(PACKET_SIZE)
        except OSError as exc:
            raise DeviceError(f"couldn't read full packet: {exc}") from exc
        if buffer is None or len(buffer) != PACKET_SIZE:
            raise DeviceError("couldn't read full packet")
        return buffer[: min(length, PACKET_SIZE)]

    def request(self, kind) -> None:
        self.send(request_packet(kind))

    def animation(self, command, animation_id) -> None:
        self.send(animation_packet(command, animation_id))

    def zone_select(self, loop, *args) -> None:
        self.send(zone_select_packet(loop, args))

    def add_action(self, action, duration, tempo, color) -> None:
        self.send(add_action_packet(action, duration, tempo, color))

    def set_dim(self, dim, *args) -> None:
        self.send(set_dim_packet(dim, args))

    def __enter__(self) -> "LightDevice":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.is_open:
            self.release()