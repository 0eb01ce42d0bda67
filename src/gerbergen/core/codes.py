"""
Rendering base classes for gerbergen

Every entity renders a fragment through to_code(). Fragments never carry a
command terminator: framing is added once, by serialize(), on the two command
categories below. Composite entities can therefore concatenate fragments
freely.
"""

from typing import Union


class GerberCode:
    """Anything that renders to a Gerber text fragment"""

    def to_code(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} does not implement to_code()")


class FunctionCode(GerberCode):
    """G, D and M codes, terminated by a single '*'"""

    def serialize(self) -> str:
        return f"{self.to_code()}*"


class ExtendedCode(GerberCode):
    """Parameter codes, framed as '%...*%'"""

    def serialize(self) -> str:
        return f"%{self.to_code()}*%"


Command = Union[FunctionCode, ExtendedCode]


def is_command(value) -> bool:
    return isinstance(value, (FunctionCode, ExtendedCode))
