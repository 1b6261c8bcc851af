"""Built-in script search directories.

Responsibilities:
- Compute the ordered fallback directories from environment and install prefix.
- Append them to the startup state after every command-line directory.

Built-in order, highest precedence first: the user's `~/.openocd`,
`OPENOCD_SCRIPTS`, `%APPDATA%/OpenOCD` (Windows only), then the installed
`site` and `scripts` directories. Installed scripts come last so any of them
can be shadowed by a same-named file in an earlier directory.
"""

from __future__ import annotations

import os
import sys
from typing import Mapping

from .config import BuildConfig, is_windows_platform
from .exe_path import ExecutableLocator, resolve_executable_dir
from .models import StartupState
from .prefix import derive_prefix
from .telemetry.logger import StartupLogger


def _join_candidate(*parts: str | None) -> str | None:
    """Concatenate path parts, or return `None` when any part is missing."""

    if any(part is None for part in parts):
        return None
    return "".join(part for part in parts if part is not None)


def _home_dir(env: Mapping[str, str], platform: str) -> str | None:
    """Return the HOME-equivalent directory from `env`, if the variable is present."""

    home = env.get("HOME")
    if home is None and is_windows_platform(platform):
        home = env.get("USERPROFILE")
    return home


def default_search_dirs(
    prefix: str,
    build_config: BuildConfig,
    env: Mapping[str, str],
    platform: str,
) -> list[str]:
    """Return the built-in search directories for `prefix`, in priority order."""

    candidates = [
        _join_candidate(_home_dir(env, platform), "/.openocd"),
        env.get("OPENOCD_SCRIPTS"),
    ]
    if is_windows_platform(platform):
        candidates.append(_join_candidate(env.get("APPDATA"), "/OpenOCD"))

    if build_config.uses_customized_layout(platform):
        # `<root>/bin` minus "bin" leaves a trailing separator behind.
        data_root = prefix.rstrip("/")
    else:
        data_root = prefix + build_config.pkgdatadir
    candidates.append(_join_candidate(data_root, "/site"))
    candidates.append(_join_candidate(data_root, "/scripts"))
    return [candidate for candidate in candidates if candidate is not None]


def build_default_dirs(
    state: StartupState,
    prefix: str,
    build_config: BuildConfig | None = None,
    env: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> None:
    """Append the built-in search directories for `prefix` to `state`."""

    for directory in default_search_dirs(
        prefix,
        build_config or BuildConfig(),
        os.environ if env is None else env,
        sys.platform if platform is None else platform,
    ):
        state.add_script_search_dir(directory)


def add_default_dirs(
    state: StartupState,
    build_config: BuildConfig | None = None,
    *,
    env: Mapping[str, str] | None = None,
    platform: str | None = None,
    locator: ExecutableLocator | None = None,
    startup_logger: StartupLogger | None = None,
) -> None:
    """Resolve the run prefix from the executable location and append built-in dirs."""

    config = build_config or BuildConfig()
    host_platform = sys.platform if platform is None else platform
    log = startup_logger or StartupLogger()

    executable_dir = resolve_executable_dir(config, locator=locator, startup_logger=log)
    run_prefix = derive_prefix(executable_dir, config.bin_suffix(host_platform))
    log.debug(
        "layout",
        "search_dirs",
        bindir=config.bindir,
        pkgdatadir=config.pkgdatadir,
        run_prefix=run_prefix,
    )
    build_default_dirs(state, run_prefix, config, env, host_platform)
