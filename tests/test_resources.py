import math

import pytest

from p2proute.resources import (
    AGGREGATE_EDGE_LENGTH,
    AggregateInformation,
    AtomicInformation,
    CacheHit,
    Position,
    ResourceInformation,
    grid_key,
)


def _atomic(too, capacity=10, occupancy=3, x=10.0, z=10.0):
    return AtomicInformation(
        id=1, too=too, poo=Position(x, 0.0, z), capacity=capacity, occupancy=occupancy
    )


def test_distance_is_euclidean_and_symmetric():
    a = Position(0.0, 0.0, 0.0)
    b = Position(3.0, 4.0, 0.0)
    assert a.distance(b) == 5.0
    assert b.distance(a) == a.distance(b)
    assert a.distance(a) == 0.0


def test_grid_key_ignores_height_and_groups_cells():
    assert grid_key(Position(10, 999, 10)) == grid_key(Position(70, 0, 5))
    near = grid_key(Position(10, 0, 10))
    across = grid_key(Position(10 + AGGREGATE_EDGE_LENGTH, 0, 10))
    assert near != across
    assert near.split(";")[1] == across.split(";")[1]


@pytest.mark.parametrize(
    "position", [Position(0, 0, 0), Position(100, 5, 300), Position(74.9, 0, 75.0)]
)
def test_aggregate_key_matches_grid_key(position):
    assert AggregateInformation.from_position(position, 0).key() == grid_key(position)


def test_from_position_in_first_cell():
    aggregate = AggregateInformation.from_position(Position(10, 0, 20), 3)
    assert aggregate.poo == Position()
    assert aggregate.level == 3
    assert aggregate.n == 0
    assert aggregate.is_new is True
    assert aggregate.capacity == 0


def test_resource_information_is_abstract():
    with pytest.raises(TypeError):
        ResourceInformation()


def test_atomic_relevance_falls_with_age_and_distance():
    info = _atomic(10.0, x=100.0, z=100.0)
    assert info.relevance(info.poo, 30.0) == info.relevance(info.poo, 10.0) - 20.0
    far = Position(500.0, 0.0, 100.0)
    assert info.relevance(far, 10.0) < info.relevance(info.poo, 10.0)


def test_save_relevance_stores_current_value():
    info = _atomic(2.0)
    where = Position(300.0, 0.0, 40.0)
    info.save_relevance(where, 9.0)
    assert info.last_relevance == info.relevance(where, 9.0)


def test_is_within_grows_with_level():
    origin = Position(10, 0, 10)
    far = Position(100, 0, 10)
    assert AggregateInformation.from_position(origin, 0).is_within(origin) is True
    assert AggregateInformation.from_position(origin, 0).is_within(far) is False
    assert AggregateInformation.from_position(origin, 1).is_within(far) is True


def test_add_accumulates_capacity_and_count():
    aggregate = AggregateInformation.from_position(Position(10, 0, 10), 0)
    first = _atomic(4.0, capacity=10, occupancy=3)
    second = _atomic(8.0, capacity=15, occupancy=7)
    aggregate.add(first)
    aggregate.add(second)
    assert aggregate.n == 2
    assert aggregate.capacity == first.capacity + second.capacity
    assert aggregate.occupancy == 0
    assert aggregate.too == second.too


def test_aggregate_relevance_inside_cell_is_negative_age():
    aggregate = AggregateInformation.from_position(Position(10, 0, 10), 0)
    aggregate.add(_atomic(4.0))
    assert aggregate.relevance(Position(20, 0, 20), 10.0) == aggregate.too - 10.0


def test_aggregate_relevance_outside_with_one_member_matches_atomic():
    aggregate = AggregateInformation.from_position(Position(10, 0, 10), 0)
    aggregate.add(_atomic(4.0))
    far = Position(1000, 0, 1000)
    expected = AtomicInformation(too=aggregate.too, poo=aggregate.poo).relevance(far, 10.0)
    assert aggregate.relevance(far, 10.0) == pytest.approx(expected)


def test_empty_aggregate_outside_has_minus_infinite_relevance():
    aggregate = AggregateInformation.from_position(Position(10, 0, 10), 0)
    relevance = aggregate.relevance(Position(1000, 0, 1000), 5.0)
    assert math.isinf(relevance)
    assert relevance < 0


def test_cache_hit_fields():
    hit = CacheHit(7, 2)
    assert (hit.occupancy, hit.level, hit.miss) == (7, 2, False)
    assert CacheHit(miss=True).miss is True