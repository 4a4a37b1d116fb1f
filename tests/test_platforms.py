"""Tests for the OS platform collaborators."""

import json
import subprocess
import sys

import psutil
import pytest

from host_probe.geometry import DisplayBounds
from host_probe.platforms import linux
from host_probe.platforms.base import HostQueryError, get_platform
from host_probe.platforms.darwin import DarwinPlatform, parse_main_display
from host_probe.platforms.linux import LinuxPlatform, parse_cpuinfo_name, parse_xrandr_primary
from host_probe.platforms.windows import WindowsPlatform

CPUINFO = """\
processor\t: 0
vendor_id\t: GenuineIntel
cpu family\t: 6
model\t\t: 60
model name\t: Intel(R) Core(TM) i7-4790K CPU @ 4.00GHz
stepping\t: 3

processor\t: 1
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i7-4790K CPU @ 4.00GHz
"""

XRANDR = """\
Screen 0: minimum 8 x 8, current 4480 x 1440, maximum 32767 x 32767
HDMI-1 connected 1920x1080+2560+0 (normal left inverted right x axis y axis) 527mm x 296mm
   1920x1080     60.00*+
DP-1 connected primary 2560x1440+0+0 (normal left inverted right x axis y axis) 597mm x 336mm
   2560x1440     59.95*+
DP-2 disconnected (normal left inverted right x axis y axis)
"""


def completed(args, stdout="", returncode=0):
    return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr="")


class TestGetPlatform:
    """Tests for the platform factory."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("linux", LinuxPlatform),
            ("win32", WindowsPlatform),
            ("darwin", DarwinPlatform),
        ],
    )
    def test_known_platforms(self, name, expected):
        assert isinstance(get_platform(name), expected)

    def test_unsupported_platform(self):
        with pytest.raises(HostQueryError, match="Unsupported platform"):
            get_platform("sunos5")

    def test_query_timeout_passed_through(self):
        assert get_platform("linux", query_timeout=1.5).query_timeout == 1.5

    def test_current_platform(self):
        if sys.platform not in ("linux", "win32", "darwin"):
            pytest.skip("unsupported test host")
        assert get_platform() is not None


class TestBasePlatform:
    """Tests for behaviour shared by all platforms."""

    def test_memory_from_psutil(self):
        assert LinuxPlatform().total_memory_bytes() == psutil.virtual_memory().total

    def test_memory_failure(self, monkeypatch):
        def broken():
            raise OSError("facility unavailable")

        monkeypatch.setattr(psutil, "virtual_memory", broken)

        with pytest.raises(HostQueryError, match="facility unavailable"):
            LinuxPlatform().total_memory_bytes()

    def test_run_timeout(self, monkeypatch):
        def slow(args, **kwargs):
            raise subprocess.TimeoutExpired(args, kwargs["timeout"])

        monkeypatch.setattr(subprocess, "run", slow)

        with pytest.raises(HostQueryError, match="did not answer"):
            LinuxPlatform(query_timeout=0.1)._run(["xrandr"])

    def test_run_missing_command(self, monkeypatch):
        def missing(args, **kwargs):
            raise FileNotFoundError(args[0])

        monkeypatch.setattr(subprocess, "run", missing)

        with pytest.raises(HostQueryError, match="not available"):
            LinuxPlatform()._run(["xrandr"])


class TestLinuxPlatform:
    """Tests for LinuxPlatform."""

    def test_parse_cpuinfo_name(self):
        assert parse_cpuinfo_name(CPUINFO) == "Intel(R) Core(TM) i7-4790K CPU @ 4.00GHz"

    def test_parse_cpuinfo_arm(self):
        content = "Processor\t: ARMv7 Processor rev 4 (v7l)\nHardware\t: BCM2835\n"
        assert parse_cpuinfo_name(content) == "ARMv7 Processor rev 4 (v7l)"

    def test_parse_cpuinfo_missing_name(self):
        assert parse_cpuinfo_name("processor\t: 0\nvendor_id\t: GenuineIntel\n") is None

    def test_processor_name_from_file(self, tmp_path, monkeypatch):
        cpuinfo = tmp_path / "cpuinfo"
        cpuinfo.write_text(CPUINFO)
        monkeypatch.setattr(linux, "CPUINFO_PATH", cpuinfo)

        assert LinuxPlatform().processor_name() == "Intel(R) Core(TM) i7-4790K CPU @ 4.00GHz"

    def test_processor_name_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(linux, "CPUINFO_PATH", tmp_path / "missing")

        assert LinuxPlatform().processor_name() is None

    def test_processor_name_unreadable(self, tmp_path, monkeypatch):
        # Reading a directory is an I/O error other than "not found"
        monkeypatch.setattr(linux, "CPUINFO_PATH", tmp_path)

        with pytest.raises(HostQueryError):
            LinuxPlatform().processor_name()

    def test_parse_xrandr_primary(self):
        assert parse_xrandr_primary(XRANDR) == DisplayBounds(0, 0, 2560, 1440)

    def test_parse_xrandr_without_primary(self):
        output = XRANDR.replace("connected primary", "connected")
        assert parse_xrandr_primary(output) == DisplayBounds(2560, 0, 1920, 1080)

    def test_parse_xrandr_no_active_output(self):
        assert parse_xrandr_primary("DP-2 disconnected (normal left)\n") is None

    def test_headless(self, monkeypatch):
        monkeypatch.delenv("DISPLAY", raising=False)
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)

        with pytest.raises(HostQueryError, match="headless"):
            LinuxPlatform().primary_display()

    def test_primary_display(self, monkeypatch):
        monkeypatch.setenv("DISPLAY", ":0")
        monkeypatch.setattr(subprocess, "run", lambda args, **kwargs: completed(args, XRANDR))

        assert LinuxPlatform().primary_display() == DisplayBounds(0, 0, 2560, 1440)

    def test_xrandr_failure(self, monkeypatch):
        def failing(args, **kwargs):
            raise subprocess.CalledProcessError(1, args, output="", stderr="Can't open display")

        monkeypatch.setenv("DISPLAY", ":0")
        monkeypatch.setattr(subprocess, "run", failing)

        with pytest.raises(HostQueryError, match="Can't open display"):
            LinuxPlatform().primary_display()

    def test_xrandr_no_outputs(self, monkeypatch):
        monkeypatch.setenv("DISPLAY", ":0")
        monkeypatch.setattr(subprocess, "run", lambda args, **kwargs: completed(args, "Screen 0:\n"))

        with pytest.raises(HostQueryError, match="no active display"):
            LinuxPlatform().primary_display()


class TestDarwinPlatform:
    """Tests for DarwinPlatform."""

    def test_memory_via_sysctl(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", lambda args, **kwargs: completed(args, "17179869184\n"))

        assert DarwinPlatform().total_memory_bytes() == 17179869184

    def test_memory_falls_back_to_psutil(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", lambda args, **kwargs: completed(args, "garbage"))

        assert DarwinPlatform().total_memory_bytes() == psutil.virtual_memory().total

    def test_processor_brand_string(self, monkeypatch):
        monkeypatch.setattr(
            subprocess,
            "run",
            lambda args, **kwargs: completed(args, "Intel(R) Core(TM) i7-4870HQ CPU @ 2.50GHz\n"),
        )

        assert DarwinPlatform().processor_name() == "Intel(R) Core(TM) i7-4870HQ CPU @ 2.50GHz"

    def test_processor_apple_silicon(self, monkeypatch):
        def fake_run(args, **kwargs):
            if args[0] == "sysctl":
                raise subprocess.CalledProcessError(1, args)
            return completed(args, "Hardware Overview:\n      Chip: Apple M1 Pro\n")

        monkeypatch.setattr(subprocess, "run", fake_run)

        assert DarwinPlatform().processor_name() == "Apple M1 Pro"

    def test_processor_unavailable(self, monkeypatch):
        def fake_run(args, **kwargs):
            raise subprocess.CalledProcessError(1, args)

        monkeypatch.setattr(subprocess, "run", fake_run)

        assert DarwinPlatform().processor_name() is None

    def test_parse_main_display(self):
        data = {
            "SPDisplaysDataType": [
                {
                    "spdisplays_ndrvs": [
                        {"_spdisplays_resolution": "1920 x 1080 @ 60.00Hz"},
                        {
                            "_spdisplays_resolution": "3024 x 1964 Retina",
                            "spdisplays_main": "spdisplays_yes",
                        },
                    ]
                }
            ]
        }
        assert parse_main_display(data) == DisplayBounds(0, 0, 3024, 1964)

    def test_parse_no_display(self):
        assert parse_main_display({"SPDisplaysDataType": [{"sppci_model": "Apple M1"}]}) is None

    def test_primary_display(self, monkeypatch):
        data = {
            "SPDisplaysDataType": [
                {"spdisplays_ndrvs": [{"_spdisplays_pixels": "2560 x 1600"}]},
            ]
        }
        monkeypatch.setattr(subprocess, "run", lambda args, **kwargs: completed(args, json.dumps(data)))

        assert DarwinPlatform().primary_display() == DisplayBounds(0, 0, 2560, 1600)

    def test_primary_display_malformed(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", lambda args, **kwargs: completed(args, "not json"))

        with pytest.raises(HostQueryError, match="Malformed"):
            DarwinPlatform().primary_display()

    def test_headless(self, monkeypatch):
        monkeypatch.setattr(
            subprocess,
            "run",
            lambda args, **kwargs: completed(args, json.dumps({"SPDisplaysDataType": []})),
        )

        with pytest.raises(HostQueryError, match="No display"):
            DarwinPlatform().primary_display()


@pytest.mark.skipif(sys.platform != "win32", reason="requires Windows")
class TestWindowsPlatform:
    """Tests for WindowsPlatform against the real host."""

    def test_processor_name(self):
        name = WindowsPlatform().processor_name()
        assert name is None or isinstance(name, str)

    def test_memory(self):
        assert WindowsPlatform().total_memory_bytes() > 0
