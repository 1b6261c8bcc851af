"""Build configuration model and loaders for ocdstartup.

Responsibilities:
- Define the install-layout settings a build is configured with.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `BuildConfig`: configured bin directory, package-data directory and layout variant.
- `ConfigLoader`: static construction helpers for `BuildConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import (
    BOOLEAN_TOKENS_HINT,
    normalize_optional_string,
    parse_permissive_boolean,
)


DEFAULT_BINDIR = "/usr/local/bin"
DEFAULT_PKGDATADIR = "/usr/local/share/openocd"
CUSTOMIZED_WINDOWS_BIN_SUFFIX = "bin"
BUILD_CONFIG_ENV_KEY = "OCDSTARTUP_BUILD_CONFIG"


def is_windows_platform(platform: str) -> bool:
    """Return whether `platform` is the native Windows family (not Cygwin)."""

    return platform == "win32"


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Install layout the running build was configured with.

    Attributes:
        bindir: Configured binary directory. Stripped from the executable
            directory to find the run prefix, and used as fallback location.
        pkgdatadir: Configured package-data directory appended to the run prefix.
        customized_windows: Use the relocatable Windows layout (`<prefix>/bin`,
            `<prefix>/site`, `<prefix>/scripts`) on Windows hosts.
    """

    bindir: str = DEFAULT_BINDIR
    pkgdatadir: str = DEFAULT_PKGDATADIR
    customized_windows: bool = False

    def validate(self) -> None:
        """Validate configured directory values."""

        if normalize_optional_string(self.bindir) is None:
            raise ValueError("`bindir` must be a non-empty string.")
        if normalize_optional_string(self.pkgdatadir) is None:
            raise ValueError("`pkgdatadir` must be a non-empty string.")

    def uses_customized_layout(self, platform: str) -> bool:
        """Return whether the customized Windows layout applies on `platform`."""

        return self.customized_windows and is_windows_platform(platform)

    def bin_suffix(self, platform: str) -> str:
        """Return the suffix stripped from the executable directory on `platform`."""

        if self.uses_customized_layout(platform):
            return CUSTOMIZED_WINDOWS_BIN_SUFFIX
        return self.bindir


class ConfigLoader:
    """Factory methods for loading `BuildConfig` from files or environment."""

    _YAML_KEYS = frozenset({"bindir", "pkgdatadir", "customized_windows"})
    _ENV_KEYS = {
        "bindir": "OCDSTARTUP_BINDIR",
        "pkgdatadir": "OCDSTARTUP_PKGDATADIR",
        "customized_windows": "OCDSTARTUP_CUSTOMIZED_WINDOWS",
    }

    @staticmethod
    def from_yaml(path: Path) -> BuildConfig:
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If `path` does not exist.
            ValueError: If the payload is not a mapping or contains invalid values.
        """

        raw_text = path.read_text(encoding="utf-8")
        payload = yaml.safe_load(raw_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader._build_config_from_mapping(payload, f"YAML config `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> BuildConfig:
        """Load configuration from environment variables, defaulting unset values."""

        env_map = os.environ if env is None else env
        bindir = normalize_optional_string(env_map.get(ConfigLoader._ENV_KEYS["bindir"]))
        pkgdatadir = normalize_optional_string(
            env_map.get(ConfigLoader._ENV_KEYS["pkgdatadir"])
        )
        customized_key = ConfigLoader._ENV_KEYS["customized_windows"]
        customized_windows = False
        if normalize_optional_string(env_map.get(customized_key)) is not None:
            customized_windows = ConfigLoader._optional_boolean(
                env_map,
                customized_key,
                f"Environment variable `{customized_key}`",
                default=False,
            )

        config = BuildConfig(
            bindir=bindir or DEFAULT_BINDIR,
            pkgdatadir=pkgdatadir or DEFAULT_PKGDATADIR,
            customized_windows=customized_windows,
        )
        config.validate()
        return config

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> BuildConfig:
        """Build a validated config from a mapping payload."""

        unknown_keys = sorted(str(key) for key in payload if key not in ConfigLoader._YAML_KEYS)
        if unknown_keys:
            raise ValueError(f"{source_label} has unknown key(s): {', '.join(unknown_keys)}")

        config = BuildConfig(
            bindir=ConfigLoader._optional_non_empty_string(payload, "bindir", source_label)
            or DEFAULT_BINDIR,
            pkgdatadir=ConfigLoader._optional_non_empty_string(
                payload, "pkgdatadir", source_label
            )
            or DEFAULT_PKGDATADIR,
            customized_windows=ConfigLoader._optional_boolean(
                payload,
                "customized_windows",
                f"{source_label} field `customized_windows`",
                default=False,
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _optional_non_empty_string(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> str | None:
        """Read an optional string field, rejecting present-but-blank values."""

        if key not in payload:
            return None
        value = normalize_optional_string(payload[key])
        if value is None:
            raise ValueError(f"{source_label} field `{key}` must be a non-empty string.")
        return value

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, field_label: str, default: bool
    ) -> bool:
        """Read a boolean field from a payload, naming `field_label` when invalid."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(f"{field_label} must be a boolean value ({BOOLEAN_TOKENS_HINT}).")
        return parsed


def load_build_config(env: Mapping[str, str] | None = None) -> BuildConfig:
    """Load the effective build configuration.

    A YAML file named by `OCDSTARTUP_BUILD_CONFIG` wins; otherwise values come
    from `OCDSTARTUP_*` environment variables and built-in defaults.
    """

    env_map = os.environ if env is None else env
    config_path = normalize_optional_string(env_map.get(BUILD_CONFIG_ENV_KEY))
    if config_path is not None:
        return ConfigLoader.from_yaml(Path(config_path))
    return ConfigLoader.from_env(env_map)
