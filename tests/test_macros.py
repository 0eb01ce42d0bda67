"""Tests for aperture macros and their primitives"""

import pytest
from gerbergen.core.errors import InvalidTemplateParameter
from gerbergen.core.macros import (
    ApertureMacro,
    CenterLinePrimitive,
    CirclePrimitive,
    MacroComment,
    MoirePrimitive,
    OutlinePrimitive,
    PolygonPrimitive,
    ThermalPrimitive,
    VariableDefinition,
    VectorLinePrimitive,
)

SQUARE = [(0.1, 0.1), (0.5, 0.1), (0.5, 0.5), (0.1, 0.5), (0.1, 0.1)]


class TestPrimitives:
    """Test the code of each primitive"""

    def test_comment(self):
        assert MacroComment("hello").to_code() == "0 hello"

    def test_circle(self):
        assert CirclePrimitive(True, 1.5, (0.0, 0.0), 0.0).to_code() == "1,1,1.5,0,0,0"
        assert CirclePrimitive(False, 99.9, (1.1, 2.2)).to_code() == "1,0,99.9,1.1,2.2"

    def test_vector_line(self):
        line = VectorLinePrimitive(True, 0.9, (0.0, 0.45), (12.0, 0.45), 0.0)
        assert line.to_code() == "20,1,0.9,0,0.45,12,0.45,0"

    def test_center_line(self):
        line = CenterLinePrimitive(True, (6.8, 1.2), (3.4, 0.6), 30.0)
        assert line.to_code() == "21,1,6.8,1.2,3.4,0.6,30"

    def test_outline(self):
        outline = OutlinePrimitive(True, SQUARE, 0.0)
        assert outline.to_code() == "4,1,4,\n0.1,0.1,\n0.5,0.1,\n0.5,0.5,\n0.1,0.5,\n0.1,0.1,\n0"

    def test_polygon(self):
        polygon = PolygonPrimitive(True, 8, (1.5, 2.0), 8.0, 0.0)
        assert polygon.to_code() == "5,1,8,1.5,2,8,0"

    def test_moire(self):
        moire = MoirePrimitive((0, 0), 5.0, 0.5, 0.5, 2, 0.1, 6.0, 0.0)
        assert moire.to_code() == "6,0,0,5,0.5,0.5,2,0.1,6,0"

    def test_thermal(self):
        thermal = ThermalPrimitive((0, 0), 8.0, 6.5, 1.0, 45.0)
        assert thermal.to_code() == "7,0,0,8,6.5,1,45"

    def test_expressions_are_verbatim(self):
        circle = CirclePrimitive(True, "$1", ("$2", "$3"))
        assert circle.to_code() == "1,1,$1,$2,$3"

    def test_variable_definition(self):
        assert VariableDefinition(4, "$1x0.75").to_code() == "$4=$1x0.75"
        assert VariableDefinition(2, 0.5).to_code() == "$2=0.5"


class TestPrimitiveValidation:
    """Test local constraints of the primitives"""

    @pytest.mark.parametrize("vertices", [2, 13])
    def test_polygon_vertices(self, vertices):
        with pytest.raises(InvalidTemplateParameter):
            PolygonPrimitive(True, vertices, (0, 0), 1.0)

    def test_negative_diameter(self):
        with pytest.raises(InvalidTemplateParameter):
            CirclePrimitive(True, -1.0, (0, 0))

    def test_outline_needs_two_points(self):
        with pytest.raises(InvalidTemplateParameter):
            OutlinePrimitive(True, [(0.1, 0.1)])

    def test_outline_must_be_closed(self):
        with pytest.raises(InvalidTemplateParameter):
            OutlinePrimitive(True, SQUARE[:-1])

    def test_outline_point_limit(self):
        points = [(float(i), 0.0) for i in range(5001)] + [(0.0, 0.0)]
        with pytest.raises(InvalidTemplateParameter):
            OutlinePrimitive(True, points)

    def test_thermal_outer_must_exceed_inner(self):
        with pytest.raises(InvalidTemplateParameter):
            ThermalPrimitive((0, 0), 6.0, 6.0, 1.0)

    def test_thermal_gap_too_large(self):
        with pytest.raises(InvalidTemplateParameter):
            ThermalPrimitive((0, 0), 8.0, 6.5, 6.0)

    def test_thermal_expressions_skip_range_checks(self):
        thermal = ThermalPrimitive((0, 0), "$1", "$2", "$3")
        assert thermal.to_code() == "7,0,0,$1,$2,$3,0"

    def test_moire_negative_gap(self):
        with pytest.raises(InvalidTemplateParameter):
            MoirePrimitive((0, 0), 5.0, 0.5, -0.5, 2, 0.1, 6.0)

    @pytest.mark.parametrize("expression", ["$1*2", "$1,2", "", "  "])
    def test_invalid_expression(self, expression):
        with pytest.raises(InvalidTemplateParameter):
            CirclePrimitive(True, expression, (0, 0))

    @pytest.mark.parametrize(
        "build",
        [
            lambda: OutlinePrimitive(True, ((0, 0, 1), (1, 1), (0, 0, 1))),
            lambda: OutlinePrimitive(True, ((0, 0), "11", (0, 0))),
            lambda: CirclePrimitive(True, 1.0, (0,)),
            lambda: CirclePrimitive(True, 1.0, "00"),
            lambda: VectorLinePrimitive(True, 1, (0, 0, 0), (1, 1)),
            lambda: CenterLinePrimitive(True, (1,), (0, 0)),
            lambda: CenterLinePrimitive(True, (1, -2), (0, 0)),
            lambda: PolygonPrimitive(True, 4, "00", 1.0),
            lambda: ThermalPrimitive(5, 8.0, 6.5, 1.0),
        ],
    )
    def test_points_must_be_pairs(self, build):
        """A point with the wrong arity would shift every later field"""
        with pytest.raises(InvalidTemplateParameter):
            build()

    @pytest.mark.parametrize("exposure", ["1*", "1,0", "", 2, 1, None])
    def test_invalid_exposure(self, exposure):
        with pytest.raises(InvalidTemplateParameter):
            CirclePrimitive(exposure, 1.0, (0, 0))

    def test_exposure_expression(self):
        assert CirclePrimitive("$1", 1.0, (0, 0)).to_code() == "1,$1,1,0,0"

    def test_variable_number(self):
        with pytest.raises(InvalidTemplateParameter):
            VariableDefinition(0, "$1")

    def test_comment_with_terminator(self):
        with pytest.raises(InvalidTemplateParameter):
            MacroComment("a*b")


class TestApertureMacro:
    """Test the AM code"""

    def test_donut(self):
        macro = ApertureMacro(
            "DONUT",
            [CirclePrimitive(True, "$1", (0, 0)), CirclePrimitive(False, "$2", (0, 0))],
        )
        assert macro.serialize() == "%AMDONUT*\n1,1,$1,0,0*\n1,0,$2,0,0*%"

    def test_empty(self):
        assert ApertureMacro("EMPTY").serialize() == "%AMEMPTY*%"

    def test_add_primitive_returns_new_macro(self):
        macro = ApertureMacro("BOX")
        extended = macro.add_primitive(CenterLinePrimitive(True, (1, 1), (0, 0)))
        assert macro.primitives == ()
        assert len(extended.primitives) == 1
        assert extended.serialize() == "%AMBOX*\n21,1,1,1,0,0,0*%"

    def test_outline_inside_macro(self):
        macro = ApertureMacro("SQ", [MacroComment("square"), OutlinePrimitive(True, SQUARE)])
        assert macro.serialize() == (
            "%AMSQ*\n0 square*\n4,1,4,\n0.1,0.1,\n0.5,0.1,\n0.5,0.5,\n0.1,0.5,\n0.1,0.1,\n0*%"
        )

    def test_not_a_primitive(self):
        with pytest.raises(InvalidTemplateParameter):
            ApertureMacro("BAD", ["1,1,1,0,0"])

    @pytest.mark.parametrize("name", ["C", "1X", ""])
    def test_invalid_name(self, name):
        with pytest.raises(InvalidTemplateParameter):
            ApertureMacro(name)
