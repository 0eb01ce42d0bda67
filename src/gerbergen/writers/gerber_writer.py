"""
Gerber Writer for gerbergen

This module turns a sequence of commands into Gerber program text. Every
command is serialized on its own line, in the given order; nothing is
reordered, merged or dropped.
"""

from typing import Iterable, Iterator, TextIO

from ..core.codes import Command, is_command
from ..core.errors import GerberError
from ..core.extended_codes import CoordinateFormat
from ..core.function_codes import Operation
from ..utils.logging import GerberLogger

LINE_TERMINATOR = "\n"


class GerberWriter:
    """Write Gerber commands to text"""

    def __init__(self, warn_on_order: bool = True):
        self.warn_on_order = warn_on_order

    def serialize(self, command: Command) -> str:
        """Serialize a single command to one framed line"""
        if not is_command(command):
            raise TypeError(f"Not a Gerber command: {command!r}")
        return command.serialize()

    def iter_lines(self, commands: Iterable[Command]) -> Iterator[str]:
        """Yield the serialized line of each command

        A failing command aborts the iteration; the raised GerberError keeps
        its type and carries the index and the command that failed.
        """
        format_declared = False
        count = 0
        for index, command in enumerate(commands):
            if isinstance(command, CoordinateFormat):
                format_declared = True
            elif (
                self.warn_on_order
                and not format_declared
                and isinstance(command, Operation)
                and command.coordinates is not None
            ):
                GerberLogger.warning(
                    f"Command #{index} uses coordinates before any FS coordinate format"
                )

            try:
                line = self.serialize(command)
            except GerberError as e:
                e.with_context(index, command)
                GerberLogger.error(f"Rendering failed: {e}")
                raise
            count += 1
            yield line

        GerberLogger.debug(f"Serialized {count} command(s)")

    def write(self, commands: Iterable[Command]) -> str:
        """Generate Gerber text from commands, one line per command"""
        return LINE_TERMINATOR.join(self.iter_lines(commands))

    def write_stream(self, commands: Iterable[Command], sink: TextIO) -> None:
        """Write the same text as write() into a text sink"""
        for index, line in enumerate(self.iter_lines(commands)):
            if index:
                sink.write(LINE_TERMINATOR)
            sink.write(line)
