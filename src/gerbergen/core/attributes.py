"""
Attributes for gerbergen

File (TF), aperture (TA) and object (TO) attributes attach metadata to the
image: a name followed by an ordered list of string values. Standard
attribute names start with '.'; their value counts come from
standard-attributes.yaml. User-defined names are only checked for syntax.

The FileFunction helpers and the FileAttribute class methods build the common
standard attributes without having to remember their field layout.
"""

import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional, Sequence, Tuple

from ..config import load_standard_attributes
from .codes import ExtendedCode
from .errors import InvalidAttributeValue

ATTRIBUTE_NAME_PATTERN = re.compile(r"^[._a-zA-Z$][._a-zA-Z0-9]*$")

# '*' and '%' end the code, ',' separates the values
RESERVED_VALUE_CHARS = set("*%,")


class Part(Enum):
    SINGLE = "Single"
    ARRAY = "Array"
    FABRICATION_PANEL = "FabricationPanel"
    COUPON = "Coupon"
    OTHER = "Other"


class Position(Enum):
    TOP = "Top"
    BOTTOM = "Bot"


class ExtendedPosition(Enum):
    TOP = "Top"
    INNER = "Inr"
    BOTTOM = "Bot"


class CopperType(Enum):
    PLANE = "Plane"
    SIGNAL = "Signal"
    MIXED = "Mixed"
    HATCHED = "Hatched"


class PlatedDrill(Enum):
    THROUGH_HOLE = "PTH"
    BLIND = "Blind"
    BURIED = "Buried"


class NonPlatedDrill(Enum):
    THROUGH_HOLE = "NPTH"
    BLIND = "Blind"
    BURIED = "Buried"


class DrillRouteType(Enum):
    DRILL = "Drill"
    ROUTE = "Rout"
    MIXED = "Mixed"


class FilePolarity(Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"


def check_cardinality(code: str, name: str, values: Sequence[str], entity=None) -> None:
    """Check the value count of a standard attribute against the data table"""
    limits = (load_standard_attributes().get(code) or {}).get(name)
    if not limits:
        return
    minimum = limits.get("min", 0)
    maximum = limits.get("max")
    if len(values) < minimum:
        raise InvalidAttributeValue(
            f"{code}{name} requires at least {minimum} value(s), got {len(values)}", entity
        )
    if maximum is not None and len(values) > maximum:
        raise InvalidAttributeValue(
            f"{code}{name} accepts at most {maximum} value(s), got {len(values)}", entity
        )


@dataclass(frozen=True)
class Attribute(ExtendedCode):
    """Base for TF/TA/TO: CODE, name, then the comma separated values"""

    name: str
    values: Tuple[str, ...] = ()

    CODE: ClassVar[str] = ""

    def __post_init__(self):
        if not isinstance(self.name, str) or not ATTRIBUTE_NAME_PATTERN.match(self.name):
            raise InvalidAttributeValue(f"Invalid attribute name: {self.name!r}", self)
        if isinstance(self.values, str):
            raise InvalidAttributeValue(
                f"Attribute values must be a sequence of strings, got {self.values!r}", self
            )
        object.__setattr__(self, "values", tuple(self.values))
        for value in self.values:
            if not isinstance(value, str):
                raise InvalidAttributeValue(f"Attribute value must be a string, got {value!r}", self)
            if RESERVED_VALUE_CHARS & set(value):
                raise InvalidAttributeValue(
                    f"Attribute value {value!r} contains a reserved character", self
                )
        check_cardinality(self.CODE, self.name, self.values, self)

    def to_code(self) -> str:
        return ",".join((f"{self.CODE}{self.name}",) + self.values)


@dataclass(frozen=True)
class FileAttribute(Attribute):
    CODE: ClassVar[str] = "TF"

    @classmethod
    def part(cls, part: Part, description: Optional[str] = None) -> "FileAttribute":
        """.Part; Part.OTHER takes a free text description"""
        if part is Part.OTHER:
            if not description:
                raise InvalidAttributeValue(".Part,Other requires a description")
            return cls(".Part", (part.value, description))
        return cls(".Part", (part.value,))

    @classmethod
    def file_polarity(cls, polarity: FilePolarity) -> "FileAttribute":
        return cls(".FilePolarity", (polarity.value,))

    @classmethod
    def generation_software(
        cls, vendor: str, application: str, version: Optional[str] = None
    ) -> "FileAttribute":
        values = (vendor, application) if version is None else (vendor, application, version)
        return cls(".GenerationSoftware", values)

    @classmethod
    def creation_date(cls, moment: datetime) -> "FileAttribute":
        """.CreationDate in ISO 8601 with seconds precision"""
        return cls(".CreationDate", (moment.isoformat(timespec="seconds"),))

    @classmethod
    def project_id(cls, name: str, guid: uuid.UUID, revision: str) -> "FileAttribute":
        return cls(".ProjectId", (name, str(guid), revision))

    @classmethod
    def md5(cls, digest: str) -> "FileAttribute":
        return cls(".MD5", (digest,))

    @classmethod
    def same_coordinates(cls, identifier: Optional[str] = None) -> "FileAttribute":
        return cls(".SameCoordinates", () if identifier is None else (identifier,))


@dataclass(frozen=True)
class ApertureAttribute(Attribute):
    CODE: ClassVar[str] = "TA"


@dataclass(frozen=True)
class ObjectAttribute(Attribute):
    CODE: ClassVar[str] = "TO"


@dataclass(frozen=True)
class DeleteAttribute(ExtendedCode):
    """TD; without a name every aperture and object attribute is deleted"""

    name: Optional[str] = None

    def __post_init__(self):
        if self.name is not None and (
            not isinstance(self.name, str) or not ATTRIBUTE_NAME_PATTERN.match(self.name)
        ):
            raise InvalidAttributeValue(f"Invalid attribute name: {self.name!r}", self)

    def to_code(self) -> str:
        return f"TD{self.name or ''}"


class FileFunction:
    """Builders for the .FileFunction file attribute"""

    @staticmethod
    def copper(
        layer: int, position: ExtendedPosition, copper_type: Optional[CopperType] = None
    ) -> FileAttribute:
        values = ["Copper", f"L{layer}", position.value]
        if copper_type is not None:
            values.append(copper_type.value)
        return FileAttribute(".FileFunction", tuple(values))

    @staticmethod
    def _side(function: str, position: Position, index: Optional[int] = None) -> FileAttribute:
        values = [function, position.value]
        if index is not None:
            values.append(str(index))
        return FileAttribute(".FileFunction", tuple(values))

    @staticmethod
    def soldermask(position: Position, index: Optional[int] = None) -> FileAttribute:
        return FileFunction._side("Soldermask", position, index)

    @staticmethod
    def legend(position: Position, index: Optional[int] = None) -> FileAttribute:
        return FileFunction._side("Legend", position, index)

    @staticmethod
    def paste(position: Position) -> FileAttribute:
        return FileFunction._side("Paste", position)

    @staticmethod
    def profile(plated: bool) -> FileAttribute:
        return FileAttribute(".FileFunction", ("Profile", "P" if plated else "NP"))

    @staticmethod
    def plated(
        from_layer: int,
        to_layer: int,
        drill: PlatedDrill,
        label: Optional[DrillRouteType] = None,
    ) -> FileAttribute:
        values = ["Plated", str(from_layer), str(to_layer), drill.value]
        if label is not None:
            values.append(label.value)
        return FileAttribute(".FileFunction", tuple(values))

    @staticmethod
    def non_plated(
        from_layer: int,
        to_layer: int,
        drill: NonPlatedDrill,
        label: Optional[DrillRouteType] = None,
    ) -> FileAttribute:
        values = ["NonPlated", str(from_layer), str(to_layer), drill.value]
        if label is not None:
            values.append(label.value)
        return FileAttribute(".FileFunction", tuple(values))

    @staticmethod
    def other(description: str) -> FileAttribute:
        return FileAttribute(".FileFunction", ("Other", description))
