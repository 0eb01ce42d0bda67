"""
Error types for gerbergen

All errors raised while building or rendering Gerber code derive from
GerberError. Rendering is deterministic, so none of them is transient.
"""

from typing import Any, Optional


class GerberError(Exception):
    """Base class for all code generation errors"""

    def __init__(self, message: str, entity: Any = None):
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.command_index: Optional[int] = None
        self.command: Any = None

    def with_context(self, command_index: int, command: Any) -> "GerberError":
        """Attach the position of the failing command within a document"""
        self.command_index = command_index
        self.command = command
        return self

    def __str__(self) -> str:
        if self.command_index is None:
            return self.message
        return f"command #{self.command_index} ({self.command!r}): {self.message}"


class NumberFormatError(GerberError, ValueError):
    """A number cannot be represented in the configured digit budget"""


class InvalidFormatSpec(GerberError, ValueError):
    """A coordinate format field is outside the range FS can encode"""


class InvalidApertureCode(GerberError, ValueError):
    """An aperture code is below the minimum reserved value"""


class InvalidTemplateParameter(GerberError, ValueError):
    """A template or macro primitive parameter violates a local constraint"""


class InvalidAttributeValue(GerberError, ValueError):
    """An attribute name or value list is malformed"""
