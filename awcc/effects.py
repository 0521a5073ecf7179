"""Lighting effects built from controller animation packets."""

from __future__ import annotations

from typing import Iterable, Sequence

from .lights import ZONE_ALL, Action, AnimationCommand, LightDevice, Zone

SPECTRUM_COLORS = (
    0xFF0000,
    0xFFA500,
    0xFFFF00,
    0x008000,
    0x00BFFF,
    0x0000FF,
    0x800080,
)
INDIVIDUAL_ZONES = (Zone.LEFT, Zone.MIDDLE_LEFT, Zone.MIDDLE_RIGHT, Zone.RIGHT)
STEP_DURATION = 500
TEMPO = 64

_WAVE_PATH = (0, 1, 2, 3)
_BOUNCE_PATH = (0, 1, 2, 3, 2, 1)


def _morph_all(device: LightDevice, duration: int, colors: Iterable[int]) -> None:
    for color in colors:
        device.add_action(Action.MORPH, duration, TEMPO, color)


def _start(device: LightDevice, animation_id: int = 1) -> None:
    device.animation(AnimationCommand.REMOVE, animation_id)
    device.animation(AnimationCommand.CONFIG_START, animation_id)


def _finish(device: LightDevice, animation_id: int = 1) -> None:
    device.animation(AnimationCommand.CONFIG_SAVE, animation_id)
    device.animation(AnimationCommand.SET_DEFAULT, animation_id)


def _path_effect(device: LightDevice, color: int, path: Sequence[int]) -> None:
    with device:
        _start(device)
        for index, zone in enumerate(INDIVIDUAL_ZONES):
            device.zone_select(1, zone)
            _morph_all(
                device,
                STEP_DURATION,
                (color if position == index else 0 for position in path),
            )
        _finish(device)


def brightness(device: LightDevice, value: int) -> None:
    """Set keyboard brightness; ``value`` is a percentage."""
    with device:
        device.set_dim((100 - value) & 0xFF, *ZONE_ALL)


def static_color(device: LightDevice, color: int) -> None:
    """Store a static color as the default animation."""
    with device:
        _start(device)
        device.zone_select(1, *ZONE_ALL)
        device.add_action(Action.COLOR, 1, 2, color)
        _finish(device)


def breathe(device: LightDevice, color: int) -> None:
    """Store a breathing effect as the default animation."""
    with device:
        _start(device)
        device.zone_select(1, *ZONE_ALL)
        device.add_action(Action.MORPH, 500, TEMPO, color)
        device.add_action(Action.MORPH, 2000, TEMPO, color)
        device.add_action(Action.MORPH, 500, TEMPO, 0)
        device.add_action(Action.MORPH, 2000, TEMPO, 0)
        device.animation(AnimationCommand.CONFIG_PLAY, 0)
        _finish(device)


def spectrum(device: LightDevice, duration: int) -> None:
    """Cycle all zones together through the spectrum colors."""
    with device:
        _start(device)
        device.zone_select(1, *ZONE_ALL)
        _morph_all(device, duration, SPECTRUM_COLORS)
        _finish(device)


def wave(device: LightDevice, color: int) -> None:
    """Sweep a color from the left zone to the right zone."""
    _path_effect(device, color, _WAVE_PATH)


def rainbow(device: LightDevice, duration: int) -> None:
    """Cycle the spectrum with each zone one step behind its left neighbour."""
    with device:
        _start(device)
        for shift, zone in enumerate(INDIVIDUAL_ZONES):
            device.zone_select(1, zone)
            rotated = SPECTRUM_COLORS[-shift:] + SPECTRUM_COLORS[:-shift]
            _morph_all(device, duration, rotated if shift else SPECTRUM_COLORS)
        _finish(device)


def back_and_forth(device: LightDevice, color: int) -> None:
    """Bounce a color between the outer zones."""
    _path_effect(device, color, _BOUNCE_PATH)


def defaultblue(device: LightDevice, color: int) -> None:
    """Store the default static color."""
    static_color(device, color)


def example_spectrum(device: LightDevice, duration: int) -> None:
    """Play a temporary spectrum cycle without saving it."""
    with device:
        device.animation(AnimationCommand.CONFIG_START, 0)
        device.zone_select(1, *ZONE_ALL)
        _morph_all(device, duration, SPECTRUM_COLORS)
        device.animation(AnimationCommand.CONFIG_PLAY, 0)


def example_breathe(device: LightDevice, duration: int, color: int) -> None:
    """Play a temporary breathing effect without saving it."""
    with device:
        device.animation(AnimationCommand.CONFIG_START, 0)
        device.zone_select(1, *ZONE_ALL)
        device.add_action(Action.MORPH, duration, TEMPO, color)
        device.add_action(Action.MORPH, duration, TEMPO, 0)
        device.animation(AnimationCommand.CONFIG_PLAY, 0)