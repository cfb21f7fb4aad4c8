import math

import pytest

from src.fleet_planner.models.domain import Coordinate
from src.fleet_planner.services.geospatial import distance, distance_matrix, haversine_km, route_length


def test_haversine_one_degree_along_equator():
    expected = 6371.0 * math.radians(1)
    assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected)


def test_distance_is_symmetric_and_non_negative():
    pairs = [
        (Coordinate(-37.8136, 144.9631), Coordinate(-37.7950, 144.9631)),
        (Coordinate(51.5, -0.12), Coordinate(40.71, -74.0)),
        (Coordinate(0.0, 179.5), Coordinate(0.0, -179.5)),
    ]
    for a, b in pairs:
        assert distance(a, b) >= 0
        assert distance(a, b) == pytest.approx(distance(b, a), rel=1e-12)


def test_distance_to_self_is_zero():
    point = Coordinate(-37.8136, 144.9631)
    assert distance(point, point) == 0


def test_route_length_sums_segments():
    points = [Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1)]
    expected = distance(points[0], points[1]) + distance(points[1], points[2])
    assert route_length(points) == pytest.approx(expected)


def test_route_length_of_short_routes_is_zero():
    assert route_length([]) == 0
    assert route_length([Coordinate(10, 10)]) == 0


def test_distance_matrix_matches_scalar_distance():
    origins = [Coordinate(0, 0), Coordinate(-37.81, 144.96)]
    destinations = [Coordinate(0, 1), Coordinate(1, 0), Coordinate(-37.79, 144.97)]

    matrix = distance_matrix(origins, destinations)

    assert matrix.shape == (2, 3)
    for i, origin in enumerate(origins):
        for j, destination in enumerate(destinations):
            assert matrix[i, j] == distance(origin, destination)


def test_distance_matrix_handles_empty_inputs():
    assert distance_matrix([], [Coordinate(0, 0)]).shape == (0, 1)
