"""Fan and thermal mode control through the ACPI call interface."""

from __future__ import annotations

import os
import re
import sys
import time
from enum import IntEnum

INTEL_PREFIX = "AMWW"
AMD_PREFIX = "AMW3"
CPUINFO_PATH = "/proc/cpuinfo"
ACPI_CALL_PATH = "/proc/acpi/call"
PKEXEC = "/usr/bin/pkexec"
RESPONSE_LIMIT = 127

ROOT_COMMANDS = frozenset(
    {
        "q",
        "quiet",
        "p",
        "performance",
        "g",
        "gmode",
        "gt",
        "b",
        "balance",
        "bs",
        "qm",
        "query",
        "gb",
        "cb",
        "sgb",
        "scb",
        "getcpufanboost",
        "getgpufanboost",
        "setcpufanboost",
        "setgpufanboost",
    }
)

_MODE_NAMES = {
    "0xa0": "Balanced",
    "0xa1": "Performance",
    "0xa3": "Quiet",
    "0xa5": "Battery Saver",
    "0xab": "Gaming",
    "0x0": "Manual",
}

_CURRENT_MODE_LABELS = (
    ("0xa0", "Balanced"),
    ("0xa1", "Performance"),
    ("0xa3", "Quiet"),
    ("0xa5", "Battery Saver"),
    ("0xab", "Gaming (G-Mode)"),
    ("0x0", "Manual"),
)

_BOOST_SENSORS = {"cpu": 0x32, "gpu": 0x33}
_HEX_RE = re.compile(r"0x([0-9a-fA-F]+)")


class FanMode(IntEnum):
    """Thermal modes and their ACPI codes."""

    BALANCED = 0xA0
    PERFORMANCE = 0xA1
    QUIET = 0xA3
    BATTERY_SAVER = 0xA5
    GAMING = 0xAB

    @property
    def hex_code(self) -> str:
        return f"0x{self.value:x}"

    @property
    def label(self) -> str:
        return _ACTIVATION_LABELS[self]


_ACTIVATION_LABELS = {
    FanMode.BALANCED: "Balance",
    FanMode.PERFORMANCE: "Performance",
    FanMode.QUIET: "Quiet",
    FanMode.BATTERY_SAVER: "Battery Saver",
    FanMode.GAMING: "Gaming",
}

DEFAULT_MODE = FanMode.PERFORMANCE


class FanError(RuntimeError):
    """Raised when the ACPI call interface cannot be used."""


def detect_acpi_prefix(cpuinfo_path=CPUINFO_PATH) -> str:
    """Return the ACPI device prefix for the CPU vendor."""
    try:
        with open(cpuinfo_path) as cpuinfo:
            for line in cpuinfo:
                if "vendor_id" in line:
                    return AMD_PREFIX if "AuthenticAMD" in line else INTEL_PREFIX
    except OSError as exc:
        print(f"Failed to open {cpuinfo_path}: {exc}", file=sys.stderr)
    return INTEL_PREFIX


def mode_name_from_hex(hex_code) -> str:
    """Name the thermal mode for a hex code such as ``0xa1``."""
    return _MODE_NAMES.get(hex_code, "Unknown")


def extract_hex_value(response) -> int:
    """Parse the first ``0x`` number in an ACPI response."""
    start = response.find("0x")
    if start < 0:
        raise ValueError("No hex value found in response.")
    match = _HEX_RE.match(response, start)
    if match is None:
        raise ValueError("Failed to parse hex value.")
    return int(match.group(1), 16) & 0xFFFFFFFF


def requires_root(command) -> bool:
    """Whether the command needs root privileges."""
    return command in ROOT_COMMANDS


def check_root(command, argv) -> None:
    """Re-run the program through pkexec if the command needs root."""
    if os.geteuid() == 0 or not requires_root(command):
        return
    print("This command requires root privileges, elevating...")
    try:
        os.execv(PKEXEC, [PKEXEC, *list(argv)[:4]])
    except OSError as exc:
        print(f"Failed to elevate privileges: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print("Failed to elevate privileges", file=sys.stderr)
    raise SystemExit(1)


class FanController:
    """Issues WMAX calls through the ACPI call file."""

    def __init__(self, prefix=INTEL_PREFIX, call_path=ACPI_CALL_PATH, delay=0.1):
        self.prefix = prefix
        self.call_path = call_path
        self.delay = delay

    def _wmax(self, method: int, *args: int) -> str:
        params = ", ".join(f"0x{arg:02x}" for arg in args)
        return f"\\_SB.{self.prefix}.WMAX 0 0x{method:02x} {{{params}}}"

    def execute(self, command) -> None:
        """Write one ACPI call."""
        try:
            with open(self.call_path, "w") as acpi:
                acpi.write(f"{command}\n")
        except OSError as exc:
            raise FanError(f"Unable to open {self.call_path}: {exc}") from exc

    def read_response(self) -> str:
        """Read the result of the last call, lower-cased."""
        try:
            with open(self.call_path) as acpi:
                response = acpi.readline(RESPONSE_LIMIT)
        except OSError as exc:
            raise FanError(f"Unable to read {self.call_path}: {exc}") from exc
        return response.lower()

    def _query(self, command: str) -> str:
        self.execute(command)
        time.sleep(self.delay)
        return self.read_response()

    def _query_mode(self) -> str:
        return self._query(self._wmax(0x14, 0x0B, 0x00, 0x00, 0x00))

    def check_current_mode(self, desired_hex) -> bool:
        """Report whether the machine is already in the given mode."""
        response = self._query_mode()
        name = mode_name_from_hex(desired_hex)
        if desired_hex in response:
            print(f"You're already in {name} mode ({desired_hex}).")
            return True
        print(f"Switching to {name} mode...")
        return False

    def print_current_mode(self) -> str:
        """Print and return the name of the current mode."""
        response = self._query_mode()
        for code, label in _CURRENT_MODE_LABELS:
            if code in response:
                print(f"Current mode: {label}")
                return label
        print(f"Current mode: Unknown ({response})")
        return "Unknown"

    def set_mode(self, mode) -> bool:
        """Switch to ``mode``; return False if it was already active."""
        mode = FanMode(mode)
        if self.check_current_mode(mode.hex_code):
            return False
        self.execute(self._wmax(0x15, 0x01, mode.value, 0x00, 0x00))
        print(f"{mode.label} mode activated.")
        return True

    def quiet_mode(self) -> bool:
        return self.set_mode(FanMode.QUIET)

    def performance_mode(self) -> bool:
        return self.set_mode(FanMode.PERFORMANCE)

    def battery_mode(self) -> bool:
        return self.set_mode(FanMode.BATTERY_SAVER)

    def balance_mode(self) -> bool:
        return self.set_mode(FanMode.BALANCED)

    def gaming_mode(self) -> bool:
        return self.set_mode(FanMode.GAMING)

    def toggle_g_mode(self) -> bool:
        """Flip G-Mode; return True if it is now on."""
        response = self._query(self._wmax(0x25, 0x02, 0x00, 0x00, 0x00))
        if "0x0" in response:
            print("G-Mode is currently OFF. Enabling Gaming Mode...")
            self.gaming_mode()
            self.execute(self._wmax(0x25, 0x01, 0x01, 0x00, 0x00))
            return True
        if "0x1" in response:
            print("G-Mode is currently ON. Reverting to Default Mode...")
            self.set_mode(DEFAULT_MODE)
            self.execute(self._wmax(0x25, 0x01, 0x00, 0x00, 0x00))
            return False
        raise FanError(f"Unable to determine G-Mode status. Response: {response}")

    def get_fan_boost(self, device) -> int:
        """Print and return the fan boost of ``cpu`` or ``gpu``."""
        sensor = _sensor(device)
        response = self._query(self._wmax(0x14, 0x0C, sensor, 0x00, 0x00))
        value = extract_hex_value(response)
        print(f"Current {device.upper()} Fan Boost: {value}%")
        return value

    def set_fan_boost(self, device, value) -> None:
        """Set the fan boost of ``cpu`` or ``gpu``."""
        if not 0 <= value <= 100:
            raise ValueError("Fan boost value must be between 1 and 100.")
        sensor = _sensor(device)
        self.execute(self._wmax(0x15, 0x02, sensor, value, 0x00))
        print(f"{device.upper()} Fan Boost set to {value}%.")


def _sensor(device: str) -> int:
    try:
        return _BOOST_SENSORS[device]
    except KeyError:
        raise ValueError(f"Unknown device type: {device}") from None