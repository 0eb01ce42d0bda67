"""
Gerber document model

A GerberDocument is the ordered list of commands of one Gerber program. The
order is the literal program order.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, TextIO

from ..config import default_format_spec, load_defaults
from ..writers.gerber_writer import GerberWriter
from .attributes import FileAttribute
from .codes import Command, is_command
from .coordinates import FormatSpec
from .extended_codes import CoordinateFormat, Unit, UnitMode


@dataclass
class GerberDocument:
    """Complete Gerber program"""

    commands: List[Command] = field(default_factory=list)

    def __post_init__(self):
        # The document owns its list; callers keep theirs
        self.commands = list(self.commands)
        for command in self.commands:
            self._check(command)

    @staticmethod
    def _check(command) -> None:
        if not is_command(command):
            raise TypeError(f"Not a Gerber command: {command!r}")

    def append(self, command: Command) -> "GerberDocument":
        self._check(command)
        self.commands.append(command)
        return self

    def extend(self, commands: Iterable[Command]) -> "GerberDocument":
        for command in commands:
            self.append(command)
        return self

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __getitem__(self, index):
        return self.commands[index]

    @property
    def format_spec(self) -> Optional[FormatSpec]:
        """FormatSpec of the first FS command, if any"""
        for command in self.commands:
            if isinstance(command, CoordinateFormat):
                return command.format_spec
        return None

    def render(self) -> str:
        return GerberWriter().write(self.commands)

    def write_to(self, sink: TextIO) -> None:
        GerberWriter().write_stream(self.commands, sink)

    @classmethod
    def from_defaults(cls, with_generation_software: bool = True) -> "GerberDocument":
        """Document starting with the FS, MO and .GenerationSoftware header from defaults.yaml"""
        defaults = load_defaults()
        document = cls()
        document.append(CoordinateFormat(default_format_spec()))
        document.append(UnitMode(Unit(defaults.get("unit", "MM"))))

        software = defaults.get("generation_software") or {}
        if with_generation_software and software.get("vendor") and software.get("application"):
            document.append(
                FileAttribute.generation_software(
                    software["vendor"], software["application"], software.get("version")
                )
            )
        return document
