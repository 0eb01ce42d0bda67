"""Tests for extended codes and aperture templates"""

import math

import pytest
from gerbergen.core.apertures import Circle, MacroTemplate, Obround, Polygon, Rectangle
from gerbergen.core.codes import ExtendedCode
from gerbergen.core.coordinates import CoordinateMode, FormatSpec, ZeroSuppression
from gerbergen.core.errors import GerberError, InvalidApertureCode, InvalidTemplateParameter
from gerbergen.core.extended_codes import (
    ApertureDefinition,
    CoordinateFormat,
    LoadPolarity,
    Polarity,
    StepAndRepeat,
    StepAndRepeatClose,
    Unit,
    UnitMode,
)


class TestCoordinateFormat:
    """Test the FS code"""

    def test_leading_absolute(self):
        assert CoordinateFormat(FormatSpec(2, 4)).serialize() == "%FSLAX24Y24*%"

    def test_two_five(self):
        assert CoordinateFormat(FormatSpec(2, 5)).serialize() == "%FSLAX25Y25*%"

    def test_trailing_incremental(self):
        spec = FormatSpec(3, 6, ZeroSuppression.TRAILING, CoordinateMode.INCREMENTAL)
        assert CoordinateFormat(spec).serialize() == "%FSTIX36Y36*%"

    def test_no_suppression_declared_as_leading(self):
        spec = FormatSpec(2, 4, ZeroSuppression.NONE)
        assert CoordinateFormat(spec).serialize() == "%FSLAX24Y24*%"

    def test_extended_framing(self):
        line = CoordinateFormat(FormatSpec(2, 4)).serialize()
        assert line.startswith("%") and line.endswith("*%")
        assert isinstance(CoordinateFormat(FormatSpec(2, 4)), ExtendedCode)


class TestSimpleExtendedCodes:
    """Test MO, LP and SR"""

    def test_unit(self):
        assert UnitMode(Unit.MILLIMETERS).serialize() == "%MOMM*%"
        assert UnitMode(Unit.INCHES).serialize() == "%MOIN*%"

    def test_polarity(self):
        assert LoadPolarity(Polarity.DARK).serialize() == "%LPD*%"
        assert LoadPolarity(Polarity.CLEAR).serialize() == "%LPC*%"

    def test_step_and_repeat(self):
        assert StepAndRepeat(2, 3, 2.0, 3.0).serialize() == "%SRX2Y3I2J3*%"

    def test_step_and_repeat_decimal_distance(self):
        assert StepAndRepeat(1, 4, 0, 2.5).serialize() == "%SRX1Y4I0J2.5*%"

    def test_step_and_repeat_close(self):
        assert StepAndRepeatClose().serialize() == "%SR*%"

    @pytest.mark.parametrize(
        "repeat_x, repeat_y", [(2.5, 1), (True, 1), (0, 1), (1, -1), ("2", 1)]
    )
    def test_step_and_repeat_counts(self, repeat_x, repeat_y):
        """Repeat counts must be positive integers"""
        with pytest.raises(InvalidTemplateParameter):
            StepAndRepeat(repeat_x, repeat_y, 3, 0)

    @pytest.mark.parametrize(
        "distance_x, distance_y", [(-3, 0), (0, -0.5), (math.nan, 0), (1, "2")]
    )
    def test_step_and_repeat_distances(self, distance_x, distance_y):
        with pytest.raises(InvalidTemplateParameter):
            StepAndRepeat(2, 2, distance_x, distance_y)

    def test_step_and_repeat_error_is_gerber_error(self):
        with pytest.raises(GerberError) as exc_info:
            StepAndRepeat(0, -1, -3, 0)
        assert isinstance(exc_info.value.entity, StepAndRepeat)


class TestApertureDefinition:
    """Test AD with the standard templates"""

    def test_circle_with_hole(self):
        definition = ApertureDefinition(10, Circle(4.0, 2.0))
        assert definition.to_code() == "ADD10C,4X2"
        assert definition.serialize() == "%ADD10C,4X2*%"

    def test_circle(self):
        assert ApertureDefinition(11, Circle(4.5)).to_code() == "ADD11C,4.5"

    def test_rectangle(self):
        assert ApertureDefinition(12, Rectangle(1.5, 2.25, 3.8)).to_code() == "ADD12R,1.5X2.25X3.8"
        assert ApertureDefinition(13, Rectangle(1.0, 1.0)).to_code() == "ADD13R,1X1"

    def test_obround(self):
        assert ApertureDefinition(14, Obround(2.0, 4.5)).to_code() == "ADD14O,2X4.5"

    def test_polygon(self):
        assert ApertureDefinition(15, Polygon(4.5, 3)).to_code() == "ADD15P,4.5X3"

    def test_polygon_rotation(self):
        template = Polygon(5.0, 4, rotation=30.6)
        assert ApertureDefinition(16, template).to_code() == "ADD16P,5X4X30.6"

    def test_polygon_hole_without_rotation(self):
        """A hole alone still writes a zero rotation before it"""
        template = Polygon(5.5, 5, hole_diameter=1.8)
        assert ApertureDefinition(17, template).to_code() == "ADD17P,5.5X5X0X1.8"

    def test_macro_reference(self):
        definition = ApertureDefinition(20, MacroTemplate("THERMAL80"))
        assert definition.serialize() == "%ADD20THERMAL80*%"

    def test_invalid_code(self):
        with pytest.raises(InvalidApertureCode):
            ApertureDefinition(9, Circle(1.0))

    def test_not_a_template(self):
        with pytest.raises(InvalidTemplateParameter):
            ApertureDefinition(10, "C,1")


class TestTemplates:
    """Test template parameters and builders"""

    def test_optional_parameters_change_arity_only(self):
        assert Circle(1.0).to_code() == "C,1"
        assert Circle(1.0).with_hole(0.5).to_code() == "C,1X0.5"

    def test_circle_with_hole_builder(self):
        assert Circle(3.0).with_hole(1.0) == Circle(3.0, 1.0)

    def test_builder_returns_new_value(self):
        circle = Circle(3.0)
        circle.with_hole(1.0)
        assert circle.hole_diameter is None

    def test_obround_with_hole_keeps_type(self):
        obround = Obround(2.0, 3.0).with_hole(1.0)
        assert isinstance(obround, Obround)
        assert obround.to_code() == "O,2X3X1"

    def test_polygon_builders(self):
        polygon = Polygon(5, 6).with_rotation(45).with_hole(1)
        assert polygon.to_code() == "P,5X6X45X1"
        assert Polygon(3.0, 4).with_rotation(45.0) == Polygon(3.0, 4, 45.0, None)
        assert Polygon(3.0, 4).with_diameter(6.0).to_code() == "P,6X4"

    def test_negative_rotation_allowed(self):
        assert Polygon(2, 3, rotation=-15).to_code() == "P,2X3X-15"

    def test_hole_larger_than_shape_is_allowed(self):
        """Holes are not checked against the outer shape"""
        assert Circle(1.0, 2.0).to_code() == "C,1X2"

    @pytest.mark.parametrize("vertices", [2, 13, 0, 4.0, True])
    def test_polygon_vertices(self, vertices):
        with pytest.raises(InvalidTemplateParameter):
            Polygon(1.0, vertices)

    @pytest.mark.parametrize(
        "build",
        [
            lambda: Circle(-1.0),
            lambda: Circle(1.0, -0.5),
            lambda: Circle(1.0, math.nan),
            lambda: Rectangle(1.0, -2.0),
            lambda: Obround(math.inf, 1.0),
            lambda: Polygon(-1.0, 4),
            lambda: Circle("1"),
        ],
    )
    def test_invalid_dimensions(self, build):
        with pytest.raises(InvalidTemplateParameter):
            build()

    def test_error_carries_entity(self):
        with pytest.raises(InvalidTemplateParameter) as exc_info:
            Rectangle(1.0, -2.0)
        assert isinstance(exc_info.value.entity, Rectangle)


class TestMacroTemplate:
    """Test references to aperture macros"""

    def test_parameters(self):
        assert MacroTemplate("DONUT", (0.5, 0.2)).to_code() == "DONUT,0.5X0.2"

    def test_with_parameters(self):
        template = MacroTemplate("DONUT").with_parameters(1, 0.25)
        assert template.to_code() == "DONUT,1X0.25"
        assert template.macro_parameters == (1, 0.25)

    def test_without_parameters(self):
        assert MacroTemplate("THERMAL80").to_code() == "THERMAL80"

    @pytest.mark.parametrize("name", ["C", "R", "O", "P"])
    def test_reserved_names(self, name):
        with pytest.raises(InvalidTemplateParameter):
            MacroTemplate(name)

    @pytest.mark.parametrize("name", ["", "1abc", "a b", "A*"])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidTemplateParameter):
            MacroTemplate(name)

    def test_invalid_parameter(self):
        with pytest.raises(InvalidTemplateParameter):
            MacroTemplate("DONUT", (math.nan,))
