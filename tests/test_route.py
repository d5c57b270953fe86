import pytest

from routemin.problem import MAX_N_CUSTOMERS, Customer
from routemin.route import Route, route_next, route_prev


def make_route(ids):
    return Route.from_customers(Customer(0), [Customer(i) for i in ids])


def ids_of(route):
    return [c.id for c in route]


def test_from_customers_frames_with_depot_copies():
    depot = Customer(0, x=1.0, y=2.0)
    body = [Customer(1), Customer(2)]
    route = Route.from_customers(depot, body)
    assert ids_of(route) == [0, 1, 2, 0]
    assert len(route) == 4
    assert route.non_depot_size() == 2
    assert route.depot_head() is not depot
    assert route.depot_tail() is not depot
    assert route.depot_head() is not route.depot_tail()
    assert route.depot_head().x == depot.x
    assert depot.route is None


def test_metadata_points_at_route():
    route = make_route([3, 1, 2])
    for i, c in enumerate(route):
        assert c.route is route
        assert c.idx == i


def test_empty_route_has_two_depots():
    route = make_route([])
    assert ids_of(route) == [0, 0]
    assert route.non_depot_size() == 0


def test_insert_customer_updates_indices():
    route = make_route([1, 2])
    c = Customer(7)
    route.insert_customer(2, c)
    assert ids_of(route) == [0, 1, 7, 2, 0]
    assert c.route is route and c.idx == 2
    assert route.customers[3].idx == 3
    route.check()


def test_insert_out_of_range():
    route = make_route([1])
    with pytest.raises(IndexError):
        route.insert_customer(4, Customer(5))
    with pytest.raises(IndexError):
        route.insert_customer(-1, Customer(5))


def test_remove_customer_detaches_it():
    route = make_route([1, 2, 3])
    removed = route.remove_customer(2)
    assert removed.id == 2
    assert removed.route is None
    assert removed.idx == -1
    assert ids_of(route) == [0, 1, 3, 0]
    assert route.customers[2].idx == 2
    route.check()


def test_remove_out_of_range():
    route = make_route([1])
    with pytest.raises(IndexError):
        route.remove_customer(3)


def test_insert_then_remove_round_trip():
    route = make_route([1, 2, 3])
    before = ids_of(route)
    c = Customer(9)
    route.insert_customer(1, c)
    assert route.remove_customer(1) is c
    assert ids_of(route) == before


def test_route_full():
    route = make_route(range(1, MAX_N_CUSTOMERS + 1))
    with pytest.raises(ValueError):
        route.insert_customer(1, Customer(MAX_N_CUSTOMERS + 1))


def test_too_many_customers_rejected():
    with pytest.raises(ValueError):
        make_route(range(1, MAX_N_CUSTOMERS + 2))


def test_dup_is_independent():
    route = make_route([1, 2])
    copy = route.dup()
    assert ids_of(copy) == ids_of(route)
    assert all(a is not b for a, b in zip(copy, route))
    assert all(c.route is copy for c in copy)
    copy.remove_customer(1)
    assert ids_of(route) == [0, 1, 2, 0]


def test_find_customer_by_id():
    route = make_route([4, 5, 6])
    found = route.find_customer_by_id(5)
    assert found is route.customers[2]
    assert route.find_customer_by_id(0) is None
    assert route.find_customer_by_id(42) is None


def test_check_detects_stale_index():
    route = make_route([1, 2])
    route.customers[1].idx = 2
    with pytest.raises(ValueError):
        route.check()


def test_check_detects_missing_depot():
    route = make_route([1, 2])
    route.customers.pop()
    route.refresh_metadata_from(0)
    with pytest.raises(ValueError):
        route.check()


def test_prev_and_next():
    route = make_route([1, 2, 3])
    middle = route.customers[2]
    assert route_prev(middle) is route.customers[1]
    assert route_next(middle) is route.customers[3]
    with pytest.raises(IndexError):
        route_prev(route.depot_head())
    with pytest.raises(IndexError):
        route_next(route.depot_tail())
    with pytest.raises(ValueError):
        route_prev(Customer(8))