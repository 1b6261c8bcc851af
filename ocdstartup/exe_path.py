"""Canonical location of the running executable.

Responsibilities:
- Locate the running executable with the technique native to the host OS.
- Reduce it to an absolute, `/`-separated directory path.
- Fall back to the configured bin directory when every technique fails.

Key types:
- `ExecutableLocator`: one platform technique, returning a full path or `None`.
- `ProcfsLocator`, `WindowsModuleLocator`, `DarwinPidPathLocator`,
  `SysctlLocator`: platform implementations.

The locator for the host platform is selected once, at import time.
"""

from __future__ import annotations

import ctypes
import ctypes.util
from dataclasses import dataclass
import os
from pathlib import Path
import sys

from .config import BuildConfig, is_windows_platform
from .telemetry.logger import StartupLogger


_PROCFS_CANDIDATES = (
    "/proc/self/exe",  # Linux, Cygwin
    "/proc/self/path/a.out",  # Solaris
    "/proc/curproc/file",  # FreeBSD with procfs mounted
)
_WINDOWS_MAX_PATH = 32768
_PROC_PIDPATHINFO_MAXSIZE = 4096
_BSD_PATH_MAX = 1024
_CTL_KERN = 1
_KERN_PROC = 14
_KERN_PROC_PATHNAME = 12


def _canonicalize(path: str) -> str | None:
    """Resolve every symlink in `path`, returning `None` when it does not exist."""

    try:
        return Path(path).resolve(strict=True).as_posix()
    except (OSError, RuntimeError):
        return None


class ExecutableLocator:
    """Interface for one way of finding the running executable."""

    def locate(self) -> str | None:
        """Return the absolute executable path, or `None` when unavailable."""

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ProcfsLocator(ExecutableLocator):
    """Resolve a self-referencing proc entry, trying each candidate in order."""

    candidates: tuple[str, ...] = _PROCFS_CANDIDATES

    def locate(self) -> str | None:
        for candidate in self.candidates:
            resolved = _canonicalize(candidate)
            if resolved is not None:
                return resolved
        return None


@dataclass(frozen=True, slots=True)
class WindowsModuleLocator(ExecutableLocator):
    """Query `GetModuleFileNameW` and normalize separators to `/`."""

    max_path: int = _WINDOWS_MAX_PATH

    def locate(self) -> str | None:
        windll = getattr(ctypes, "windll", None)
        if windll is None:
            return None
        buffer = ctypes.create_unicode_buffer(self.max_path)
        try:
            length = windll.kernel32.GetModuleFileNameW(None, buffer, self.max_path)
        except OSError:
            return None
        if length <= 0:
            return None
        return buffer.value.replace("\\", "/")


@dataclass(frozen=True, slots=True)
class DarwinPidPathLocator(ExecutableLocator):
    """Query `proc_pidpath` for the current process id."""

    max_size: int = _PROC_PIDPATHINFO_MAXSIZE

    def locate(self) -> str | None:
        try:
            libproc = ctypes.CDLL(ctypes.util.find_library("proc") or "libproc.dylib")
            buffer = ctypes.create_string_buffer(self.max_size)
            length = libproc.proc_pidpath(os.getpid(), buffer, self.max_size)
        except (OSError, AttributeError):
            return None
        if length <= 0:
            return None
        return os.fsdecode(buffer.value)


@dataclass(frozen=True, slots=True)
class SysctlLocator(ExecutableLocator):
    """Query `kern.proc.pathname` through `sysctl`, then resolve symlinks."""

    max_size: int = _BSD_PATH_MAX

    def locate(self) -> str | None:
        try:
            libc = ctypes.CDLL(ctypes.util.find_library("c"), use_errno=True)
            mib = (ctypes.c_int * 4)(_CTL_KERN, _KERN_PROC, _KERN_PROC_PATHNAME, -1)
            size = ctypes.c_size_t(self.max_size)
            buffer = ctypes.create_string_buffer(self.max_size)
            status = libc.sysctl(mib, len(mib), buffer, ctypes.byref(size), None, 0)
        except (OSError, AttributeError):
            return None
        if status != 0:
            return None
        return _canonicalize(os.fsdecode(buffer.value))


def select_locator(platform: str) -> ExecutableLocator:
    """Return the executable locator native to `platform` (a `sys.platform` value)."""

    if is_windows_platform(platform):
        return WindowsModuleLocator()
    if platform == "darwin":
        return DarwinPidPathLocator()
    if platform.startswith(("freebsd", "dragonfly")):
        return SysctlLocator()
    return ProcfsLocator()


_PLATFORM_LOCATOR = select_locator(sys.platform)


def platform_locator() -> ExecutableLocator:
    """Return the locator selected for the host platform."""

    return _PLATFORM_LOCATOR


def strip_filename(path: str) -> str:
    """Drop the trailing `/`-separated component of `path`."""

    head, separator, _ = path.rpartition("/")
    if not separator:
        return path
    return head


def resolve_executable_dir(
    build_config: BuildConfig | None = None,
    locator: ExecutableLocator | None = None,
    startup_logger: StartupLogger | None = None,
) -> str:
    """Return the canonical directory holding the running executable.

    Never raises. When the locator finds nothing, the configured bin directory
    is used instead: resolved when it exists, verbatim otherwise.
    """

    config = build_config or BuildConfig()
    log = startup_logger or StartupLogger()
    active_locator = locator or platform_locator()

    executable_path = active_locator.locate()
    if executable_path is not None:
        return strip_filename(executable_path)

    log.warning("unresolved", "exe_path", fallback="bindir")
    log.debug("fallback", "exe_path", bindir=config.bindir)
    return _canonicalize(config.bindir) or config.bindir
