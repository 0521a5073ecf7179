"""Command-line entry point for keyboard lighting and fan control."""

from __future__ import annotations

import re
import sys
from typing import Callable

from .effects import (
    back_and_forth,
    breathe,
    brightness,
    defaultblue,
    rainbow,
    spectrum,
    static_color,
    wave,
)
from .fans import FanController, FanError, check_root, detect_acpi_prefix
from .lights import DeviceError, LightDevice

DEFAULT_BLUE = 0x00FFFF

_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1
_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_DEC_RE = re.compile(r"\s*([+-]?)([0-9]*)")

_USAGE = """
Alienware Command Center for Dell G Series
==========================================

Usage:
  awcc [command] [arguments]...

Lighting Controls:
  brightness <value>     Set keyboard brightness (0-100)
  static <color>         Set static color (hex RGB)
  breathe <color>        Breathing color effect
  wave <color>           Wave color effect
  bkf <color>            Back-and-forth color effect
  rainbow <duration>     Rainbow spectrum cycle (ms)
  spectrum <duration>    Full color cycle (ms)
  defaultblue            Set default static blue color

Fan Controls (Run as root):
  qm                     Query current fan mode
  g                      Set G-Mode
  q                      Set Quiet Mode
  p                      Set Performance Mode
  b                      Set Balanced Mode
  bs                     Set Battery Saver Mode
  gt                     Toggle G-Mode (useful for keybinds)

Fan Boost Controls (Run as root):
  cb                      Get CPU fan boost
  gb                      Get GPU fan boost
  scb <value>             Set CPU fan boost (1-100)
  sgb <value>             Set GPU fan boost (1-100)
"""


def usage_text() -> str:
    """Return the help text."""
    return _USAGE


def _strtol(text: str, pattern: re.Pattern, base: int) -> int:
    match = pattern.match(text)
    sign, digits = match.group(1), match.group(2)
    value = int(digits, base) if digits else 0
    if sign == "-":
        value = -value
    return max(_LONG_MIN, min(_LONG_MAX, value))


def _atoi(text: str) -> int:
    return _strtol(text, _DEC_RE, 10)


def parse_color(text) -> int:
    """Parse a hex RGB color; zero is rejected."""
    color = _strtol(text, _HEX_RE, 16) & 0xFFFFFFFF
    if color == 0:
        raise ValueError(f"invalid color {text}")
    return color


def parse_duration(text) -> int:
    """Parse a duration in milliseconds; zero is rejected."""
    duration = _strtol(text, _DEC_RE, 10) & 0xFFFF
    if duration == 0:
        raise ValueError(f"invalid duration {text}")
    return duration


def parse_brightness(text) -> int:
    """Parse a brightness percentage into the value the effect expects."""
    value = (100 - _atoi(text)) & 0xFF
    if value > 100:
        raise ValueError("brightness value must be between 0 and 100")
    return value


_LIGHT_COMMANDS: dict[str, tuple[Callable[[str], int], Callable]] = {
    "brightness": (parse_brightness, brightness),
    "static": (parse_color, static_color),
    "spectrum": (parse_duration, spectrum),
    "breathe": (parse_color, breathe),
    "rainbow": (parse_duration, rainbow),
    "wave": (parse_color, wave),
    "bkf": (parse_color, back_and_forth),
}

_FAN_ACTIONS: dict[str, Callable[[FanController], object]] = {
    "qm": FanController.print_current_mode,
    "query": FanController.print_current_mode,
    "q": FanController.quiet_mode,
    "quiet": FanController.quiet_mode,
    "bs": FanController.battery_mode,
    "battery": FanController.battery_mode,
    "b": FanController.balance_mode,
    "balance": FanController.balance_mode,
    "p": FanController.performance_mode,
    "performance": FanController.performance_mode,
    "g": FanController.gaming_mode,
    "gmode": FanController.gaming_mode,
    "gt": FanController.toggle_g_mode,
    "cb": lambda controller: controller.get_fan_boost("cpu"),
    "getcpufanboost": lambda controller: controller.get_fan_boost("cpu"),
    "gb": lambda controller: controller.get_fan_boost("gpu"),
    "getgpufanboost": lambda controller: controller.get_fan_boost("gpu"),
}

_BOOST_SETTERS = {
    "scb": "cpu",
    "setcpufanboost": "cpu",
    "sgb": "gpu",
    "setgpufanboost": "gpu",
}


def _run_light(effect: Callable, value: int) -> None:
    device = LightDevice.open()
    try:
        effect(device, value)
    finally:
        device.close()


def _dispatch(command: str, rest: list[str], full_argv: list[str]) -> None:
    if command in _LIGHT_COMMANDS and rest:
        parser, effect = _LIGHT_COMMANDS[command]
        _run_light(effect, parser(rest[0]))
    elif command == "defaultblue":
        _run_light(defaultblue, DEFAULT_BLUE)
    elif command in _FAN_ACTIONS:
        controller = FanController(detect_acpi_prefix())
        check_root(command, full_argv)
        _FAN_ACTIONS[command](controller)
    elif command in _BOOST_SETTERS:
        device = _BOOST_SETTERS[command]
        if not rest:
            raise ValueError(f"missing value for {device.upper()} fan boost")
        value = _atoi(rest[0])
        controller = FanController(detect_acpi_prefix())
        check_root(command, full_argv)
        controller.set_fan_boost(device, value)
    else:
        print(usage_text())


def main(argv=None) -> int:
    """Run one command; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    program = sys.argv[0] if sys.argv and sys.argv[0] else "awcc"
    if not args:
        print(usage_text())
        return 0
    try:
        _dispatch(args[0], args[1:], [program, *args])
    except DeviceError as exc:
        print(f"fatal: {exc}", file=sys.stderr)
        return 1
    except FanError as exc:
        print(exc, file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())