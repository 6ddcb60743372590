"""End-to-end tests for the reference geoWithin evaluator.

Covers:
- Box, polygon and circle queries over stored person locations
- Silent exclusion of locations whose discriminator is not ``"Point"``
- Descriptive failures for wrongly shaped or top-level location classes
- Region validation: hole containment, self-intersection, hole overlap
- Link depth and boundary configuration
"""

from __future__ import annotations

import logging

import pytest
from pydantic import Field

from geo_query.core.config import EvaluatorConfig
from geo_query.evaluator import InvalidRegionError, SchemaMismatchError, geo_within
from geo_query.models.distance import Distance
from geo_query.models.point import GeoPoint
from geo_query.models.shapes import GeoBox, GeoCircle, GeoPolygon, GeoShape
from geo_query.store.records import EmbeddedObject, Location, StoredObject
from tests.conftest import ring

# ---------------------------------------------------------------------------
# Stored models
# ---------------------------------------------------------------------------


class PersonLocation(StoredObject):
    name: str
    location: Location | None = None


class CoordinatesOnly(EmbeddedObject):
    coordinates: list[float] = Field(default_factory=list)


class TypeOnly(EmbeddedObject):
    type: str = "Point"


class TopLevelPoint(StoredObject):
    coordinates: list[float] = Field(default_factory=list)
    type: str = "Point"


class PersonWithInvalidTypes(StoredObject):
    name: str = ""
    coordinates_embedded: CoordinatesOnly | None = None
    type_embedded: TypeOnly | None = None
    top_level_point: TopLevelPoint | None = None


class TravelLog(StoredObject):
    locations: list[Location] = Field(default_factory=list)
    stops: dict[str, Location] = Field(default_factory=dict)
    maybe_locations: list[Location] | None = None


class Trip(StoredObject):
    traveller: PersonLocation | None = None


def names(records: list[PersonLocation]) -> list[str]:
    return [record.name for record in records]


@pytest.fixture()
def people() -> list[PersonLocation]:
    """New York, Copenhagen and Roskilde residents, plus one without a location."""
    return [
        PersonLocation(name="Diana", location=Location.at(40.7128, -74.0060)),
        PersonLocation(name="Maria", location=Location.at(55.6761, 12.5683)),
        PersonLocation(name="Tomas", location=Location.at(55.6280, 12.0826)),
        PersonLocation(name="Manuela", location=None),
    ]


def _query(people: list[PersonLocation], shape: GeoShape) -> list[str]:
    return names(geo_within(PersonLocation, people, "location", shape))


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class TestBoxQueries:
    """Box containment."""

    def test_box_matches_only_maria(self, people: list[PersonLocation]) -> None:
        box = GeoBox.create(GeoPoint(55.6281, 12.0826), GeoPoint(55.6762, 12.5684)).unwrap()
        assert _query(people, box) == ["Maria"]

    def test_box_from_bounds_matches_copenhagen_area(self, people: list[PersonLocation]) -> None:
        box = GeoBox.from_bounds(bottom=55.6279, left=12.0825, top=55.6762, right=12.5684)
        assert _query(people, box.unwrap()) == ["Maria", "Tomas"]

    def test_wide_box_matches_all_located(self, people: list[PersonLocation]) -> None:
        box = GeoBox.create(GeoPoint(0, -75), GeoPoint(60, 15)).unwrap()
        assert _query(people, box) == ["Diana", "Maria", "Tomas"]

    def test_inverted_box_matches_like_normal_box(self, people: list[PersonLocation]) -> None:
        """Current behaviour: swapped corners select the same rectangle."""
        box = GeoBox.create(GeoPoint(60, 15), GeoPoint(0, -75)).unwrap()
        assert _query(people, box) == ["Diana", "Maria", "Tomas"]


class TestPolygonQueries:
    """Polygon containment."""

    def test_polygon_edge_is_inclusive(
        self, people: list[PersonLocation], copenhagen_ring: list[GeoPoint]
    ) -> None:
        polygon = GeoPolygon.create(copenhagen_ring).unwrap()
        assert _query(people, polygon) == ["Maria"]

    def test_triangle(self, people: list[PersonLocation]) -> None:
        triangle = ring((55, 12), (55.67, 12.5), (55.67, 11.5), (55, 12))
        assert _query(people, GeoPolygon.create(triangle).unwrap()) == ["Tomas"]

    def test_point_in_hole_is_excluded(self) -> None:
        outer = ring((55, 12), (55, 13), (56, 13), (56, 12), (55, 12))
        hole = ring((55.6, 12.5), (55.6, 12.6), (55.7, 12.6), (55.7, 12.5), (55.6, 12.5))
        polygon = GeoPolygon.create(outer, [hole]).unwrap()
        records = [
            PersonLocation(name="Maria", location=Location.at(55.6761, 12.5683)),
            PersonLocation(name="Tomas", location=Location.at(55.6280, 12.0826)),
        ]
        assert _query(records, polygon) == ["Tomas"]


class TestCircleQueries:
    """Circle containment on the sphere."""

    def test_radians(self, people: list[PersonLocation]) -> None:
        circle = GeoCircle.create(GeoPoint(55.67, 12.56), 0.001).unwrap()
        assert _query(people, circle) == ["Maria"]

    @pytest.mark.parametrize(
        ("kilometers", "expected"),
        [
            (10, ["Maria"]),
            (100, ["Maria", "Tomas"]),
        ],
    )
    def test_distance(
        self, people: list[PersonLocation], kilometers: float, expected: list[str]
    ) -> None:
        radius = Distance.from_kilometers(kilometers).unwrap()
        circle = GeoCircle.from_distance(GeoPoint(55.67, 12.56), radius).unwrap()
        assert _query(people, circle) == expected

    def test_transatlantic(self, people: list[PersonLocation]) -> None:
        radius = Distance.from_kilometers(5000).unwrap()
        circle = GeoCircle.from_distance(GeoPoint(45, -20), radius).unwrap()
        assert _query(people, circle) == ["Diana", "Maria", "Tomas"]

    def test_zero_radius_matches_center_only(self) -> None:
        records = [PersonLocation(name="Here", location=Location.at(10, 10))]
        circle = GeoCircle.create(GeoPoint(10, 10), 0).unwrap()
        assert _query(records, circle) == ["Here"]


# ---------------------------------------------------------------------------
# Stored data handling
# ---------------------------------------------------------------------------


class TestStoredData:
    """Records are excluded, not rejected, when their location is unusable."""

    def test_wrong_discriminator_is_silently_excluded(self, people: list[PersonLocation]) -> None:
        box = GeoBox.create(GeoPoint(55.6281, 12.0826), GeoPoint(55.6762, 12.5684)).unwrap()
        assert len(_query(people, box)) == 1

        for person in people:
            if person.location is not None:
                person.location.type = "Polygon"

        assert _query(people, box) == []

    def test_malformed_coordinates_are_excluded(self) -> None:
        records = [
            PersonLocation(name="Short", location=Location(coordinates=[12.5])),
            PersonLocation(name="Ok", location=Location.at(55.65, 12.5)),
        ]
        box = GeoBox.from_bounds(55, 12, 56, 13).unwrap()
        assert _query(records, box) == ["Ok"]

    def test_custom_point_type(self) -> None:
        location = Location(type="GeoPoint", coordinates=[12.5, 55.6])
        records = [PersonLocation(name="Maria", location=location)]
        box = GeoBox.from_bounds(55, 12, 56, 13).unwrap()
        config = EvaluatorConfig(point_type="GeoPoint")
        matched = geo_within(PersonLocation, records, "location", box, config=config)
        assert names(matched) == ["Maria"]
        assert _query(records, box) == []

    def test_exclusive_boundary(self, people: list[PersonLocation]) -> None:
        box = GeoBox.from_bounds(bottom=55.6761, left=12.0, top=56, right=13).unwrap()
        assert _query(people, box) == ["Maria"]

        config = EvaluatorConfig(boundary_inclusive=False)
        assert geo_within(PersonLocation, people, "location", box, config=config) == []

    def test_logs_evaluated_query(
        self, people: list[PersonLocation], caplog: pytest.LogCaptureFixture
    ) -> None:
        box = GeoBox.from_bounds(0, -75, 60, 15).unwrap()
        with caplog.at_level(logging.INFO, logger="geo_query.evaluator"):
            _query(people, box)
        assert "GEOWITHIN evaluated" in caplog.text
        assert "matched=3" in caplog.text


# ---------------------------------------------------------------------------
# Schema failures
# ---------------------------------------------------------------------------


class TestSchemaMismatch:
    """Location classes the evaluator cannot query."""

    SHAPE = GeoCircle(GeoPoint(0, 0), 10.0)

    def _within(self, key_path: str) -> list[PersonWithInvalidTypes]:
        record = PersonWithInvalidTypes(
            coordinates_embedded=CoordinatesOnly(coordinates=[2, 1]),
            type_embedded=TypeOnly(),
            top_level_point=TopLevelPoint(),
        )
        return geo_within(PersonWithInvalidTypes, [record], key_path, self.SHAPE)

    @pytest.mark.parametrize("key_path", ["coordinates_embedded", "type_embedded"])
    def test_missing_location_fields(self, key_path: str) -> None:
        with pytest.raises(SchemaMismatchError) as exc_info:
            self._within(key_path)
        assert str(exc_info.value) == (
            f"Query '{key_path} GEOWITHIN GeoCircle([0, 0], 10)' links to data in the "
            "wrong format for a geoWithin query"
        )

    def test_top_level_class(self) -> None:
        with pytest.raises(SchemaMismatchError) as exc_info:
            self._within("top_level_point")
        assert str(exc_info.value) == (
            "A GEOWITHIN query can only operate on a link to an embedded class "
            "but 'TopLevelPoint' is at the top level"
        )

    def test_not_a_link(self) -> None:
        with pytest.raises(SchemaMismatchError, match="is not a link"):
            self._within("name")

    @pytest.mark.parametrize("key_path", ["locations", "stops", "maybe_locations"])
    def test_collection_of_locations_is_not_a_link(self, key_path: str) -> None:
        log = TravelLog(
            locations=[Location.at(1, 1)],
            stops={"home": Location.at(1, 1)},
            maybe_locations=[Location.at(1, 1)],
        )
        box = GeoBox.from_bounds(0, 0, 2, 2).unwrap()
        with pytest.raises(SchemaMismatchError) as exc_info:
            geo_within(TravelLog, [log], key_path, box)
        assert str(exc_info.value) == (
            f"Property 'TravelLog.{key_path}' is not a link to an object"
        )

    def test_optional_link_is_unwrapped(self, people: list[PersonLocation]) -> None:
        box = GeoBox.from_bounds(0, -75, 60, 15).unwrap()
        assert _query(people, box) == ["Diana", "Maria", "Tomas"]

    def test_unknown_property(self) -> None:
        with pytest.raises(SchemaMismatchError, match="not found"):
            self._within("nowhere")

    def test_too_deep(self, people: list[PersonLocation]) -> None:
        trips = [Trip(traveller=person) for person in people]
        box = GeoBox.from_bounds(0, -75, 60, 15).unwrap()
        with pytest.raises(SchemaMismatchError, match="follows 2 links"):
            geo_within(Trip, trips, "traveller.location", box)

    def test_deeper_links_when_configured(self, people: list[PersonLocation]) -> None:
        trips = [Trip(traveller=person) for person in people]
        box = GeoBox.from_bounds(0, -75, 60, 15).unwrap()
        config = EvaluatorConfig(max_link_depth=2)
        assert len(geo_within(Trip, trips, "traveller.location", box, config=config)) == 3

    def test_error_is_structured(self) -> None:
        with pytest.raises(SchemaMismatchError) as exc_info:
            self._within("top_level_point")
        payload = exc_info.value.to_error_dict()
        assert payload["category"] == "query"
        assert payload["code"] == "GEO_SCHEMA_MISMATCH"


# ---------------------------------------------------------------------------
# Region failures
# ---------------------------------------------------------------------------


class TestInvalidRegion:
    """Geometry checks deferred from construction to query time."""

    def test_hole_outside_outer_ring(
        self, people: list[PersonLocation], unit_square: list[GeoPoint]
    ) -> None:
        hole = ring((2, 2), (2, 3), (3, 3), (3, 2), (2, 2))
        polygon = GeoPolygon.create(unit_square, [hole]).unwrap()
        with pytest.raises(InvalidRegionError) as exc_info:
            _query(people, polygon)
        assert str(exc_info.value) == (
            "Invalid region in GEOWITHIN query for parameter "
            "'GeoPolygon({[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]}, "
            "{[2, 2], [3, 2], [3, 3], [2, 3], [2, 2]})': "
            "'Secondary ring 1 not contained by first exterior ring - "
            "secondary rings must be holes in the first ring'"
        )

    @pytest.mark.parametrize(
        "hole",
        [
            # shares the outer ring's southern edge
            ring((0, 0.1), (0.5, 0.1), (0.5, 0.5), (0, 0.5), (0, 0.1)),
            # crosses the outer ring's eastern edge
            ring((0.25, 0.5), (0.75, 0.5), (0.75, 1.5), (0.25, 1.5), (0.25, 0.5)),
        ],
    )
    def test_hole_touching_or_crossing_outer_ring(
        self, people: list[PersonLocation], unit_square: list[GeoPoint], hole: list[GeoPoint]
    ) -> None:
        polygon = GeoPolygon.create(unit_square, [hole]).unwrap()
        with pytest.raises(InvalidRegionError, match="Secondary ring 1 not contained"):
            _query(people, polygon)

    def test_second_hole_is_named(
        self,
        people: list[PersonLocation],
        unit_square: list[GeoPoint],
        inner_square: list[GeoPoint],
    ) -> None:
        outside = ring((2, 2), (2, 3), (3, 3), (3, 2), (2, 2))
        polygon = GeoPolygon.create(unit_square, [inner_square, outside]).unwrap()
        with pytest.raises(InvalidRegionError, match="Secondary ring 2 not contained"):
            _query(people, polygon)

    def test_contained_hole_is_accepted(
        self,
        people: list[PersonLocation],
        unit_square: list[GeoPoint],
        inner_square: list[GeoPoint],
    ) -> None:
        polygon = GeoPolygon.create(unit_square, [inner_square]).unwrap()
        assert _query(people, polygon) == []

    def test_self_intersecting_ring(self, people: list[PersonLocation]) -> None:
        bowtie = ring((0, 0), (1, 1), (0, 1), (1, 0), (0, 0))
        polygon = GeoPolygon.create(bowtie).unwrap()
        with pytest.raises(InvalidRegionError, match="Ring 0 is not valid"):
            _query(people, polygon)

    def test_overlapping_holes(self, people: list[PersonLocation]) -> None:
        outer = ring((0, 0), (0, 10), (10, 10), (10, 0), (0, 0))
        first = ring((1, 1), (1, 4), (4, 4), (4, 1), (1, 1))
        second = ring((3, 3), (3, 6), (6, 6), (6, 3), (3, 3))
        polygon = GeoPolygon.create(outer, [first, second]).unwrap()
        with pytest.raises(InvalidRegionError, match="Secondary rings 1 and 2 overlap"):
            _query(people, polygon)
