"""GNU `getopt_long`-style option scanning.

Responsibilities:
- Split raw arguments into options, option arguments and operands.
- Report malformed options with getopt-style diagnostics instead of raising.

Supported conventions: clustered short options (`-hv`), attached or separate
required arguments (`-fx`, `-f x`, `--file=x`, `--file x`), optional arguments
attached or taken from a following non-option argument (`-d2`, `-d 2`,
`--debug=2`, `--debug 2`), unique-prefix abbreviation of long options, `--`
to end option scanning, and permutation of operands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence


NO_ARGUMENT = 0
REQUIRED_ARGUMENT = 1
OPTIONAL_ARGUMENT = 2
UNKNOWN_OPTION = "?"


@dataclass(frozen=True, slots=True)
class LongOption:
    """One long option definition.

    Attributes:
        name: Option name without the leading `--`.
        has_arg: One of `NO_ARGUMENT`, `REQUIRED_ARGUMENT`, `OPTIONAL_ARGUMENT`.
        code: Short option character reported when the long option is seen.
    """

    name: str
    has_arg: int
    code: str


@dataclass(frozen=True, slots=True)
class ScannedOption:
    """One recognized (or rejected) option occurrence.

    Attributes:
        code: Short option character, or `UNKNOWN_OPTION` for a rejected option.
        argument: Option argument, `None` when absent.
        diagnostic: getopt-style error message for rejected options.
    """

    code: str
    argument: str | None = None
    diagnostic: str | None = None


def parse_optstring(optstring: str) -> dict[str, int]:
    """Parse a getopt option string such as `hvd::l:` into argument modes."""

    modes: dict[str, int] = {}
    index = 0
    while index < len(optstring):
        character = optstring[index]
        index += 1
        if optstring.startswith("::", index):
            modes[character] = OPTIONAL_ARGUMENT
            index += 2
        elif optstring.startswith(":", index):
            modes[character] = REQUIRED_ARGUMENT
            index += 1
        else:
            modes[character] = NO_ARGUMENT
    return modes


def _optional_value(args: Sequence[str], index: int) -> str | None:
    """Return `args[index]` when it can serve as a detached optional argument."""

    if index < len(args) and args[index] and not args[index].startswith("-"):
        return args[index]
    return None


class OptionScanner:
    """Scan an argument vector left to right, yielding options in order.

    Operands (non-option arguments) are collected in `operands` while scanning.
    """

    def __init__(
        self,
        optstring: str,
        long_options: Sequence[LongOption],
        prog: str = "ocdstartup",
    ) -> None:
        """Initialize the scanner from short and long option definitions."""

        self._short_modes = parse_optstring(optstring)
        self._long_options = tuple(long_options)
        self._prog = prog
        self.operands: list[str] = []

    def _error(self, message: str) -> ScannedOption:
        """Build a rejected-option result carrying a diagnostic."""

        return ScannedOption(UNKNOWN_OPTION, diagnostic=f"{self._prog}: {message}")

    def scan(self, args: Sequence[str]) -> Iterator[ScannedOption]:
        """Yield every option in `args`, in command-line order."""

        self.operands = []
        index = 0
        while index < len(args):
            arg = args[index]
            index += 1
            if arg == "--":
                self.operands.extend(args[index:])
                return
            if arg.startswith("--"):
                option, index = self._scan_long(arg[2:], args, index)
                yield option
                continue
            if len(arg) < 2 or not arg.startswith("-"):
                self.operands.append(arg)
                continue

            position = 1
            while position < len(arg):
                character = arg[position]
                position += 1
                mode = self._short_modes.get(character)
                if mode is None or character == ":":
                    yield self._error(f"invalid option -- '{character}'")
                    continue
                if mode == NO_ARGUMENT:
                    yield ScannedOption(character)
                    continue

                attached = arg[position:]
                if attached:
                    yield ScannedOption(character, attached)
                elif mode == OPTIONAL_ARGUMENT:
                    argument = _optional_value(args, index)
                    if argument is not None:
                        index += 1
                    yield ScannedOption(character, argument)
                elif index < len(args):
                    yield ScannedOption(character, args[index])
                    index += 1
                else:
                    yield self._error(f"option requires an argument -- '{character}'")
                break

    def _scan_long(
        self, body: str, args: Sequence[str], index: int
    ) -> tuple[ScannedOption, int]:
        """Scan one `--name[=value]` option and return it with the next index."""

        name, has_value, value = body.partition("=")
        option = self._match_long(name)
        if isinstance(option, ScannedOption):
            return option, index

        if option.has_arg == NO_ARGUMENT:
            if has_value:
                return self._error(f"option '--{option.name}' doesn't allow an argument"), index
            return ScannedOption(option.code), index
        if has_value:
            return ScannedOption(option.code, value), index
        if option.has_arg == OPTIONAL_ARGUMENT:
            argument = _optional_value(args, index)
            if argument is None:
                return ScannedOption(option.code), index
            return ScannedOption(option.code, argument), index + 1
        if index < len(args):
            return ScannedOption(option.code, args[index]), index + 1
        return self._error(f"option '--{option.name}' requires an argument"), index

    def _match_long(self, name: str) -> LongOption | ScannedOption:
        """Return the long option for `name` (exact or unique prefix) or an error."""

        for option in self._long_options:
            if option.name == name:
                return option

        matches = [option for option in self._long_options if option.name.startswith(name)]
        if not matches:
            return self._error(f"unrecognized option '--{name}'")
        if len(matches) > 1:
            possibilities = " ".join(f"'--{option.name}'" for option in matches)
            return self._error(
                f"option '--{name}' is ambiguous; possibilities: {possibilities}"
            )
        return matches[0]
