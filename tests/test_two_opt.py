import random
from collections import Counter

from src.fleet_planner.models.domain import Coordinate
from src.fleet_planner.services.geospatial import route_length
from src.fleet_planner.services.routing.two_opt import two_opt

DEPOT = Coordinate(0.0, 0.0)


def test_two_opt_leaves_short_routes_unchanged():
    assert two_opt([DEPOT, DEPOT]) == [DEPOT, DEPOT]
    route = [DEPOT, Coordinate(1, 1), DEPOT]
    assert two_opt(route) == route


def test_two_opt_uncrosses_square_tour():
    crossing = [DEPOT, Coordinate(1, 1), Coordinate(0, 1), Coordinate(1, 0), DEPOT]

    improved = two_opt(crossing)

    assert improved == [DEPOT, Coordinate(0, 1), Coordinate(1, 1), Coordinate(1, 0), DEPOT]
    assert route_length(improved) < route_length(crossing)


def test_two_opt_zero_budget_returns_copy():
    crossing = [DEPOT, Coordinate(1, 1), Coordinate(0, 1), Coordinate(1, 0), DEPOT]

    result = two_opt(crossing, max_iterations=0)

    assert result == crossing
    assert result is not crossing


def test_two_opt_never_lengthens_and_keeps_points():
    rng = random.Random(3)
    for _ in range(10):
        interior = [Coordinate(rng.uniform(-38, -37.5), rng.uniform(144.8, 145.2)) for _ in range(9)]
        route = [DEPOT] + interior + [DEPOT]

        improved = two_opt(route, max_iterations=100)

        assert route_length(improved) <= route_length(route)
        assert improved[0] == DEPOT and improved[-1] == DEPOT
        assert Counter(improved[1:-1]) == Counter(interior)
