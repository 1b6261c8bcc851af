"""Integration-test fixtures for a deterministic host environment."""

from __future__ import annotations

import pytest

from tests.helpers import FixedLocator


@pytest.fixture(autouse=True)
def host_locator(monkeypatch: pytest.MonkeyPatch) -> FixedLocator:
    """Pin the executable location, build layout and user environment."""

    locator = FixedLocator("/usr/bin/openocd")
    monkeypatch.setattr("ocdstartup.exe_path._PLATFORM_LOCATOR", locator)
    monkeypatch.setenv("HOME", "/home/u")
    monkeypatch.setenv("OCDSTARTUP_BINDIR", "/bin")
    monkeypatch.setenv("OCDSTARTUP_PKGDATADIR", "/share/openocd")
    for key in (
        "OPENOCD_SCRIPTS",
        "APPDATA",
        "OCDSTARTUP_BUILD_CONFIG",
        "OCDSTARTUP_CUSTOMIZED_WINDOWS",
    ):
        monkeypatch.delenv(key, raising=False)
    return locator
