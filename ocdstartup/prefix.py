"""Installation prefix derivation from the executable directory."""

from __future__ import annotations


def find_suffix(text: str, suffix: str) -> int | None:
    """Return the index where `suffix` starts at the end of `text`, or `None`.

    An empty suffix matches at `len(text)`.
    """

    if not suffix:
        return len(text)
    if len(suffix) > len(text) or not text.endswith(suffix):
        return None
    return len(text) - len(suffix)


def derive_prefix(executable_dir: str, bin_suffix: str) -> str:
    """Strip `bin_suffix` from the end of `executable_dir` when present.

    A directory that does not end with the suffix is returned unchanged, so a
    relocated executable still yields a usable (if unstripped) prefix.
    """

    end_of_prefix = find_suffix(executable_dir, bin_suffix)
    if end_of_prefix is None:
        return executable_dir
    return executable_dir[:end_of_prefix]
