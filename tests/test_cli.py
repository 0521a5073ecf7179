import builtins
import io
from unittest import mock

import pytest

from awcc.cli import main, parse_brightness, parse_color, parse_duration, usage_text


class FakeAcpi:
    """Answers reads of the ACPI call file and records writes to it."""

    def __init__(self, response, path="/proc/acpi/call"):
        self.path = path
        self.response = response
        self.writes = []
        self._real_open = builtins.open

    def open(self, file, mode="r", *args, **kwargs):
        if str(file) != self.path:
            return self._real_open(file, mode, *args, **kwargs)
        if "w" in mode:
            buffer = io.StringIO()
            writes = self.writes
            original_close = buffer.close

            def close():
                if not buffer.closed:
                    writes.append(buffer.getvalue())
                original_close()

            buffer.close = close
            return buffer
        return io.StringIO(self.response)


def test_usage_text():
    text = usage_text()
    assert "awcc [command] [arguments]..." in text
    assert "Set G-Mode" in text


@pytest.mark.parametrize(
    "text,expected",
    [("FF00FF", 0xFF00FF), ("0x00FFFF", 0x00FFFF), ("800080", 0x800080)],
)
def test_parse_color(text, expected):
    assert parse_color(text) == expected


@pytest.mark.parametrize("text", ["zz", "0", "", "0x"])
def test_parse_color_invalid(text):
    with pytest.raises(ValueError, match="invalid color"):
        parse_color(text)


def test_parse_duration():
    assert parse_duration("500") == 500
    assert parse_duration(" 1000ms") == 1000


@pytest.mark.parametrize("text", ["abc", "0", "65536"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError, match="invalid duration"):
        parse_duration(text)


def test_parse_brightness_bounds():
    assert parse_brightness("100") == 0
    assert parse_brightness("0") == 100


@pytest.mark.parametrize("text", ["101", "150", "-1"])
def test_parse_brightness_invalid(text):
    with pytest.raises(ValueError, match="between 0 and 100"):
        parse_brightness(text)


def test_main_no_args_prints_usage(capsys):
    assert main([]) == 0
    assert "Lighting Controls:" in capsys.readouterr().out


def test_main_unknown_command_prints_usage(capsys):
    assert main(["bogus"]) == 0
    assert "Fan Boost Controls" in capsys.readouterr().out


def test_main_invalid_color(capsys):
    assert main(["static", "zz"]) == 1
    assert "error: invalid color zz" in capsys.readouterr().err


def test_main_invalid_duration(capsys):
    assert main(["rainbow", "0"]) == 1
    assert "error: invalid duration 0" in capsys.readouterr().err


def test_main_missing_boost_value(capsys):
    assert main(["scb"]) == 1
    assert "error: missing value for CPU fan boost" in capsys.readouterr().err
    assert main(["sgb"]) == 1
    assert "error: missing value for GPU fan boost" in capsys.readouterr().err


def test_main_query_mode(capsys):
    fake = FakeAcpi("0xa1\n")
    with mock.patch("os.geteuid", return_value=0), mock.patch(
        "builtins.open", fake.open
    ):
        status = main(["qm"])
    assert status == 0
    assert "Current mode: Performance" in capsys.readouterr().out
    assert len(fake.writes) == 1


def test_main_get_cpu_boost(capsys):
    fake = FakeAcpi(f"{hex(30)}\n")
    with mock.patch("os.geteuid", return_value=0), mock.patch(
        "builtins.open", fake.open
    ):
        status = main(["cb"])
    assert status == 0
    assert "Current CPU Fan Boost: 30%" in capsys.readouterr().out


def test_main_set_boost_out_of_range(capsys):
    fake = FakeAcpi("")
    with mock.patch("os.geteuid", return_value=0), mock.patch(
        "builtins.open", fake.open
    ):
        status = main(["sgb", "150"])
    assert status == 1
    assert fake.writes == []
    assert "between 1 and 100" in capsys.readouterr().err


def test_main_acpi_unavailable(capsys):
    with mock.patch("os.geteuid", return_value=0), mock.patch(
        "builtins.open", FakeAcpi("", path="/unused").open
    ), mock.patch("awcc.fans.ACPI_CALL_PATH", "/nonexistent/acpi/call"):
        status = main(["gt"])
    assert status in (0, 1)
    assert capsys.readouterr().err != "" or status == 0


def test_main_elevates_when_not_root(capsys):
    with mock.patch("os.geteuid", return_value=1000), mock.patch(
        "os.execv"
    ) as execv:
        with pytest.raises(SystemExit):
            main(["q"])
    args = execv.call_args.args
    assert args[0] == "/usr/bin/pkexec"
    assert args[1][-1] == "q"