"""
gerbergen Public API

High-level API functions for integrating gerbergen into other projects.
Provides simple functions that render command sequences and documents to
strings or Gerber files.
"""

from pathlib import Path
from typing import Iterable, Union

from .core.codes import Command
from .core.document import GerberDocument
from .utils.logging import GerberLogger
from .writers.gerber_writer import GerberWriter


def render_commands(commands: Iterable[Command]) -> str:
    """
    Render commands to Gerber text, one line per command.

    Args:
        commands: Function and extended codes in program order

    Returns:
        Gerber text without a trailing newline

    Example:
        from gerbergen import Comment, EndOfFile, render_commands

        render_commands([Comment(" empty"), EndOfFile()])
        # 'G04 empty*\\nM02*'
    """
    return GerberWriter().write(commands)


def write_gerber_string(document: Union[GerberDocument, Iterable[Command]]) -> str:
    """
    Render a document (or any command sequence) to Gerber text.

    Args:
        document: GerberDocument or iterable of commands

    Returns:
        Gerber text without a trailing newline
    """
    if isinstance(document, GerberDocument):
        return document.render()
    return render_commands(document)


def write_gerber_file(
    document: Union[GerberDocument, Iterable[Command]],
    gerber_path: Union[str, Path],
    enable_logging: bool = False,
) -> str:
    """
    Render a document and save it as a Gerber file.

    The file ends with a single newline after the last command. Nothing is
    written when rendering fails.

    Args:
        document: GerberDocument or iterable of commands
        gerber_path: Path where the Gerber file should be saved
        enable_logging: Write a log file to a 'logs' directory next to the output

    Returns:
        Path to the created Gerber file

    Example:
        import gerbergen

        doc = gerbergen.GerberDocument.from_defaults()
        doc.append(gerbergen.EndOfFile())
        gerbergen.write_gerber_file(doc, "board-F_Cu.gbr")
    """
    gerber_file = Path(gerber_path)

    if enable_logging:
        GerberLogger.setup_logger(str(gerber_file))

    try:
        content = write_gerber_string(document)
        with open(gerber_file, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
            f.write("\n")
        GerberLogger.success(f"Wrote {gerber_file.name}")
    finally:
        if enable_logging:
            GerberLogger.cleanup()

    return str(gerber_file)
