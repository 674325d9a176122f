"""Single-character command line options and their parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TextIO

from .stringutils import ParseError, parse_int

__all__ = ["UNNAMED", "CommandOptionError", "CommandOption", "CommandOptionParser"]

UNNAMED = ""
"""Key of the option that collects parameters given before any named option."""

_MISSING: Any = object()


class CommandOptionError(Exception):
    """Raised for invalid command lines or invalid option lookups."""


@dataclass
class CommandOption:
    """An option letter with its allowed parameter count and collected parameters."""

    option_char: str = "-"
    min_params: int = 0
    max_params: int = 0
    help_text: str = ""
    present: bool = False
    params: list[str] = field(default_factory=list)

    def add_param(self, param: str) -> None:
        """Append a parameter given after this option."""
        self.params.append(param)

    def set_present(self) -> None:
        """Mark the option as given on the command line."""
        self.present = True

    def validate(self) -> None:
        """Check the parameter count of a present option."""
        if not self.present:
            return
        if len(self.params) > self.max_params:
            raise CommandOptionError(
                f"option -{self.option_char} has too many parameters specified."
            )
        if len(self.params) < self.min_params:
            raise CommandOptionError(
                f"option -{self.option_char} has too few parameters specified."
            )

    def get_param(self, index: int, default: Any = _MISSING) -> Any:
        """Return parameter ``index``, or ``default`` when given and the option is absent."""
        if default is not _MISSING and not self.present:
            return default
        if not 0 <= index < len(self.params):
            raise CommandOptionError(
                f"Internal Error: index out of range for option: {self.option_char}"
            )
        return self.params[index]

    def get_param_as_int(
        self,
        index: int,
        min_value: int | None = None,
        max_value: int | None = None,
        default: Any = _MISSING,
    ) -> Any:
        """Return parameter ``index`` as an integer checked against the given bounds.

        When ``default`` is given and the option is absent, ``default`` is returned.
        """
        if default is not _MISSING and not self.present:
            return default
        raw = self.get_param(index)
        try:
            value = parse_int(raw)
        except ParseError:
            raise CommandOptionError(
                f'Invalid numeric value: "{raw}" on option -{self.option_char}'
            ) from None
        too_low = min_value is not None and value < min_value
        too_high = max_value is not None and value > max_value
        if too_low or too_high:
            raise CommandOptionError(
                f'Value "{value}" out of range: [{min_value}..{max_value}] '
                f"on option -{self.option_char}"
            )
        return value


class CommandOptionParser:
    """Parses arguments of the form ``-abc param ...`` into registered options."""

    def __init__(self) -> None:
        self._options: dict[str, CommandOption] = {}
        self.add_option(CommandOption(UNNAMED, 0, 0, "Unnamed Options"))

    def add_option(self, option: CommandOption) -> None:
        """Register an option, replacing any with the same letter."""
        self._options[option.option_char] = option

    def get_option(self, option_char: str) -> CommandOption:
        """Return the registered option for ``option_char``."""
        try:
            return self._options[option_char]
        except KeyError:
            raise CommandOptionError(f"invalid option lookup: {option_char}") from None

    def parse(self, argv: list[str]) -> None:
        """Parse the arguments, not including the program name, and validate them."""
        current = UNNAMED
        self.get_option(current).set_present()

        for arg in argv:
            if len(arg) >= 2 and arg.startswith("-"):
                for current in arg[1:]:
                    option = self._options.get(current)
                    if option is None:
                        raise CommandOptionError(f"-{current} is not a valid command option.")
                    option.set_present()
            else:
                self.get_option(current).add_param(arg)

        for key in sorted(self._options):
            self._options[key].validate()

    def display_options_help(self, out: TextIO) -> None:
        """Write one help line per named option, in letter order."""
        for key in sorted(self._options):
            if key != UNNAMED:
                out.write(f"    -{key} {self._options[key].help_text}\n")