"""Tests for the point, ring and geometry parsers.

Covers:
- Longitude/latitude swap at the point level
- Stray parentheses absorbed by the point parser
- Non-numeric, missing and non-finite coordinates
- Fail-fast rings (one bad point fails the ring)
- Keyword stripping and ring splitting
- Collapse of a single ring to Polygon
"""

from __future__ import annotations

import pytest

from wkt_layers.models.geometry import MultiPolygon, Polygon
from wkt_layers.parsing import (
    InvalidPointError,
    InvalidRingError,
    WktParseError,
    parse_geometry,
    parse_point,
    parse_ring,
    split_rings,
    strip_shape_keyword,
)


class TestParsePoint:
    """Point token → (lat, lon)."""

    def test_swaps_longitude_and_latitude(self) -> None:
        assert parse_point("1 2") == (2.0, 1.0)

    def test_negative_and_decimal_values(self) -> None:
        assert parse_point("-3.7038 40.4168") == (40.4168, -3.7038)

    @pytest.mark.parametrize("token", ["(((1 2", "1 2)))", "((1 2))", "(1 2"])
    def test_strips_stray_parentheses(self, token: str) -> None:
        assert parse_point(token) == (2.0, 1.0)

    @pytest.mark.parametrize("token", ["a b", "1 b", "a 2", "1,2"])
    def test_non_numeric_fails(self, token: str) -> None:
        with pytest.raises(InvalidPointError):
            parse_point(token)

    @pytest.mark.parametrize("token", ["1", "", "()", "1 2 3", "1  2"])
    def test_wrong_number_of_coordinates_fails(self, token: str) -> None:
        with pytest.raises(InvalidPointError):
            parse_point(token)

    @pytest.mark.parametrize("token", ["nan 2", "1 nan", "inf 2", "1 -inf", "1e999 2"])
    def test_non_finite_fails(self, token: str) -> None:
        with pytest.raises(InvalidPointError):
            parse_point(token)

    def test_error_code(self) -> None:
        with pytest.raises(InvalidPointError) as exc_info:
            parse_point("a b")
        assert exc_info.value.code == "WKT_POINT_INVALID"
        assert exc_info.value.retryable is False


class TestParseRing:
    """Comma-space separated tokens → ordered ring."""

    def test_parses_points_in_order(self) -> None:
        assert parse_ring("1 2, 3 4, 5 6") == ((2.0, 1.0), (4.0, 3.0), (6.0, 5.0))

    def test_tolerates_leading_and_trailing_parentheses(self) -> None:
        assert parse_ring("((1 2, 3 4))") == ((2.0, 1.0), (4.0, 3.0))

    def test_single_point_ring(self) -> None:
        assert parse_ring("1 2") == ((2.0, 1.0),)

    def test_one_bad_point_fails_ring(self) -> None:
        with pytest.raises(InvalidRingError, match="Ring point 1"):
            parse_ring("1 2, a b, 5 6")

    def test_comma_without_space_is_not_a_delimiter(self) -> None:
        with pytest.raises(InvalidRingError):
            parse_ring("1 2,3 4")

    def test_empty_text_fails(self) -> None:
        with pytest.raises(InvalidRingError):
            parse_ring("")


class TestShapeKeyword:
    """Keyword stripping and ring splitting."""

    def test_strips_multipolygon(self) -> None:
        assert strip_shape_keyword("MULTIPOLYGON (((1 2)))") == "(((1 2)))"

    def test_strips_polygon(self) -> None:
        assert strip_shape_keyword("POLYGON ((1 2))") == "((1 2))"

    def test_strips_only_one_keyword(self) -> None:
        assert strip_shape_keyword("MULTIPOLYGON POLYGON ((1 2))") == "POLYGON ((1 2))"

    def test_no_keyword_is_tolerated(self) -> None:
        assert strip_shape_keyword("((1 2))") == "((1 2))"

    def test_split_rings(self) -> None:
        assert split_rings("(((1 2, 3 4), (5 6, 7 8)))") == ["(((1 2, 3 4", "5 6, 7 8)))"]


class TestParseGeometry:
    """Full geometry text → Polygon | MultiPolygon."""

    def test_polygon(self, polygon_text: str) -> None:
        geometry = parse_geometry(polygon_text)
        assert geometry == Polygon(coords=((2.0, 1.0), (4.0, 3.0), (6.0, 5.0)))

    def test_multipolygon(self, multipolygon_text: str) -> None:
        geometry = parse_geometry(multipolygon_text)
        assert isinstance(geometry, MultiPolygon)
        assert len(geometry.polygons) == 2
        assert all(len(polygon.coords) == 3 for polygon in geometry.polygons)
        assert geometry.polygons[0].coords[0] == (2.0, 1.0)
        assert geometry.polygons[1].coords[-1] == (12.0, 11.0)

    def test_single_ring_multipolygon_collapses_to_polygon(self) -> None:
        geometry = parse_geometry("MULTIPOLYGON (((1 2, 3 4, 5 6)))")
        assert isinstance(geometry, Polygon)

    def test_text_without_keyword(self) -> None:
        assert isinstance(parse_geometry("((1 2, 3 4, 5 6))"), Polygon)

    @pytest.mark.parametrize("ring_count", [1, 2, 3, 7])
    def test_ring_count_decides_shape(self, ring_count: int) -> None:
        rings = ", ".join(f"({i} 0, {i} 1, {i} 2)" for i in range(ring_count))
        geometry = parse_geometry(f"MULTIPOLYGON (({rings}))")
        if ring_count == 1:
            assert isinstance(geometry, Polygon)
        else:
            assert isinstance(geometry, MultiPolygon)
            assert len(geometry.polygons) == ring_count

    def test_bad_point_fails_whole_geometry(self) -> None:
        with pytest.raises(WktParseError, match="Ring 0"):
            parse_geometry("POLYGON ((1 2, a b, 5 6))")

    def test_bad_second_ring_fails_whole_geometry(self) -> None:
        with pytest.raises(WktParseError, match="Ring 1"):
            parse_geometry("MULTIPOLYGON (((1 2, 3 4), (x y, 9 10)))")

    def test_parsing_is_idempotent(self, multipolygon_text: str) -> None:
        assert parse_geometry(multipolygon_text) == parse_geometry(multipolygon_text)

    def test_geometry_error_carries_stage(self) -> None:
        with pytest.raises(WktParseError) as exc_info:
            parse_geometry("POLYGON (())")
        assert exc_info.value.stage == "parse_wkt"
        assert exc_info.value.code == "WKT_PARSE_FAILED"
