"""Unit tests for built-in script search directory ordering."""

from __future__ import annotations

import io

from ocdstartup.config import BuildConfig
from ocdstartup.models import StartupState
from ocdstartup.search_dirs import add_default_dirs, build_default_dirs, default_search_dirs
from ocdstartup.telemetry.logger import StartupLogger
from tests.helpers import FixedLocator


_USR_CONFIG = BuildConfig(bindir="/bin", pkgdatadir="/share/openocd")


def test_default_search_dirs_orders_home_before_installed_dirs() -> None:
    """HOME entry comes first, then the installed `site` and `scripts` dirs."""

    dirs = default_search_dirs("/usr", _USR_CONFIG, {"HOME": "/home/u"}, "linux")

    assert dirs == [
        "/home/u/.openocd",
        "/usr/share/openocd/site",
        "/usr/share/openocd/scripts",
    ]


def test_default_search_dirs_inserts_openocd_scripts_after_home() -> None:
    """`OPENOCD_SCRIPTS` is used verbatim between HOME and the installed dirs."""

    env = {"HOME": "/home/u", "OPENOCD_SCRIPTS": "/opt/scripts"}

    dirs = default_search_dirs("/usr", _USR_CONFIG, env, "linux")

    assert dirs == [
        "/home/u/.openocd",
        "/opt/scripts",
        "/usr/share/openocd/site",
        "/usr/share/openocd/scripts",
    ]


def test_default_search_dirs_skips_only_unset_environment() -> None:
    """Absent variables contribute nothing; APPDATA is ignored off Windows."""

    dirs = default_search_dirs("/usr", _USR_CONFIG, {"APPDATA": "C:/x"}, "linux")

    assert dirs == ["/usr/share/openocd/site", "/usr/share/openocd/scripts"]


def test_default_search_dirs_uses_present_but_empty_values_verbatim() -> None:
    """A variable that is set counts even when empty or blank."""

    env = {"HOME": "", "OPENOCD_SCRIPTS": " "}

    dirs = default_search_dirs("/usr", _USR_CONFIG, env, "linux")

    assert dirs == [
        "/.openocd",
        " ",
        "/usr/share/openocd/site",
        "/usr/share/openocd/scripts",
    ]


def test_default_search_dirs_adds_appdata_on_windows_only() -> None:
    """APPDATA is consulted on Windows, after HOME and OPENOCD_SCRIPTS."""

    env = {
        "USERPROFILE": "C:/Users/u",
        "OPENOCD_SCRIPTS": "D:/scripts",
        "APPDATA": "C:/Users/u/AppData/Roaming",
    }

    dirs = default_search_dirs("C:/OpenOCD", _USR_CONFIG, env, "win32")

    assert dirs == [
        "C:/Users/u/.openocd",
        "D:/scripts",
        "C:/Users/u/AppData/Roaming/OpenOCD",
        "C:/OpenOCD/share/openocd/site",
        "C:/OpenOCD/share/openocd/scripts",
    ]


def test_default_search_dirs_customized_windows_layout_skips_pkgdatadir() -> None:
    """The customized Windows layout keeps `site`/`scripts` directly under the root."""

    config = BuildConfig(bindir="/bin", pkgdatadir="/share/openocd", customized_windows=True)

    dirs = default_search_dirs("C:/OpenOCD/", config, {}, "win32")

    assert dirs == ["C:/OpenOCD/site", "C:/OpenOCD/scripts"]


def test_build_default_dirs_appends_after_existing_entries() -> None:
    """Built-in directories always follow directories already in the state."""

    state = StartupState()
    state.add_script_search_dir("/cli/one")
    state.add_script_search_dir("/cli/two")

    build_default_dirs(state, "/usr", _USR_CONFIG, {"HOME": "/home/u"}, "linux")

    assert state.search_dirs == [
        "/cli/one",
        "/cli/two",
        "/home/u/.openocd",
        "/usr/share/openocd/site",
        "/usr/share/openocd/scripts",
    ]


def test_add_default_dirs_derives_prefix_from_executable_location(
    log_sink: io.StringIO,
    startup_logger: StartupLogger,
) -> None:
    """The run prefix is the executable directory with the bindir suffix removed."""

    state = StartupState()

    add_default_dirs(
        state,
        _USR_CONFIG,
        env={},
        platform="linux",
        locator=FixedLocator("/opt/ocd/bin/openocd"),
        startup_logger=startup_logger,
    )

    assert state.search_dirs == [
        "/opt/ocd/share/openocd/site",
        "/opt/ocd/share/openocd/scripts",
    ]
    assert "stage=search_dirs event=layout" in log_sink.getvalue()
    assert "run_prefix=/opt/ocd" in log_sink.getvalue()


def test_add_default_dirs_with_absolute_configured_layout() -> None:
    """An executable found exactly at the configured bindir yields an empty prefix."""

    state = StartupState()

    add_default_dirs(
        state,
        BuildConfig(),
        env={},
        platform="linux",
        locator=FixedLocator("/usr/local/bin/openocd"),
    )

    assert state.search_dirs == [
        "/usr/local/share/openocd/site",
        "/usr/local/share/openocd/scripts",
    ]


def test_add_default_dirs_keeps_unmatched_prefix() -> None:
    """A relocated executable keeps its whole directory as prefix."""

    state = StartupState()

    add_default_dirs(
        state,
        _USR_CONFIG,
        env={},
        platform="linux",
        locator=FixedLocator("/opt/tool/openocd"),
    )

    assert state.search_dirs[0] == "/opt/tool/share/openocd/site"


def test_add_default_dirs_customized_windows_strips_literal_bin() -> None:
    """Customized Windows builds strip `bin` rather than the configured bindir."""

    state = StartupState()
    config = BuildConfig(bindir="/bin", pkgdatadir="/share/openocd", customized_windows=True)

    add_default_dirs(
        state,
        config,
        env={},
        platform="win32",
        locator=FixedLocator("C:/Tools/OpenOCD/bin/openocd.exe"),
    )

    assert state.search_dirs == ["C:/Tools/OpenOCD/site", "C:/Tools/OpenOCD/scripts"]
