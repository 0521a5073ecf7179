# awcc

A command-line control center for the keyboard lighting and the fan
(thermal) modes of Dell G Series laptops on Linux. It has no dependencies
beyond the Python standard library.

## Installation

```
pip install .
```

This installs the `awcc` command.

## Usage

```
awcc [command] [arguments]...
```

Running `awcc` with no command, or with a command it does not recognise,
prints the list of commands. Errors are printed to standard error and the
command exits with status 1.

### Lighting

| Command                | Effect                                            |
|------------------------|---------------------------------------------------|
| `brightness <value>`   | Set the keyboard dim level, 0 to 100              |
| `static <color>`       | Static color (hex RGB, e.g. `FF00FF`)             |
| `breathe <color>`      | Breathing color effect                            |
| `wave <color>`         | Sweep a color from the left zone to the right     |
| `bkf <color>`          | Bounce a color back and forth across the zones    |
| `rainbow <duration>`   | Rainbow cycle, each zone one step behind the next |
| `spectrum <duration>`  | All zones cycle through the colors together       |
| `defaultblue`          | Set the static color `00FFFF`                     |

Colors are hexadecimal, with or without a `0x` prefix; a color of zero is
rejected. Durations are the length of each step in milliseconds; zero is
rejected. For `brightness`, the number is sent to the controller as its dim
level, so `0` is fully lit and `100` is off; values above 100 are rejected.

Except for `brightness`, each effect is stored on the controller as its
default animation.

Examples:

```
awcc brightness 0
awcc static 00FF00
awcc rainbow 500
```

The lighting controller (USB vendor `187c`, product `0550` or `0551`) is
found by looking through `/sys/class/hidraw` and is reached through its
`/dev/hidrawN` node, so your user needs read and write access to that node.

### Fan modes

These commands talk to the firmware through `/proc/acpi/call` (the
`acpi_call` kernel module must be loaded) and need root. When run as a
normal user, `awcc` re-launches itself through `/usr/bin/pkexec`.

| Command              | Mode                                      |
|----------------------|-------------------------------------------|
| `qm`, `query`        | Show the current mode                     |
| `g`, `gmode`         | G-Mode                                    |
| `q`, `quiet`         | Quiet                                     |
| `p`, `performance`   | Performance                               |
| `b`, `balance`       | Balanced                                  |
| `bs`, `battery`      | Battery saver                             |
| `gt`                 | Toggle G-Mode (handy for a key binding)   |

Before switching, the current mode is read; if the machine is already in the
requested mode nothing is changed. Turning G-Mode off with `gt` switches to
Performance mode.

The CPU vendor is read from `/proc/cpuinfo` to pick the ACPI path for
Intel (`AMWW`) or AMD (`AMW3`) machines.

### Fan boost

| Command                      | Effect                     |
|------------------------------|----------------------------|
| `cb`, `getcpufanboost`       | Show CPU fan boost         |
| `gb`, `getgpufanboost`       | Show GPU fan boost         |
| `scb`, `setcpufanboost <n>`  | Set CPU fan boost (0-100)  |
| `sgb`, `setgpufanboost <n>`  | Set GPU fan boost (0-100)  |

```
sudo awcc scb 50
```

## Using it from Python

Lighting effects live in `awcc.effects` and take an open
`awcc.lights.LightDevice`. Each effect acquires the device for itself;
close the device when done.

```python
from contextlib import closing

from awcc.effects import static_color, wave
from awcc.lights import LightDevice

with closing(LightDevice.open()) as device:
    static_color(device, 0xFF00FF)
    wave(device, 0x00FF00)
```

Lower-level packets can be sent directly while the device is acquired
(using it as a context manager acquires it and releases it on exit):

```python
from contextlib import closing

from awcc.lights import ZONE_ALL, LightDevice

with closing(LightDevice.open()) as device, device:
    device.set_dim(0x32, *ZONE_ALL)
```

The packet builders (`request_packet`, `animation_packet`,
`zone_select_packet`, `add_action_packet`, `set_dim_packet`) return the
raw bytes without touching any device.

Fan control goes through `awcc.fans.FanController`:

```python
from awcc.fans import FanController, FanMode, detect_acpi_prefix

fans = FanController(detect_acpi_prefix())
print(fans.print_current_mode())
fans.set_mode(FanMode.QUIET)
fans.set_fan_boost("cpu", 40)
```

Device problems raise `awcc.lights.DeviceError`; problems with the ACPI call
file raise `awcc.fans.FanError`; bad values raise `ValueError`.

## Limitations

Each command does one thing and exits: there is no background service, no
saved profiles and no reading back of the lighting configuration beyond the
raw `LightDevice.receive` call.