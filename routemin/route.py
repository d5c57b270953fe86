"""Vehicle routes: a depot, a sequence of customers and the depot again.

Every customer in a route knows its route and its index in it; the
``route`` and ``idx`` fields of :class:`~routemin.problem.Customer` are
kept up to date by the methods that change the sequence.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from routemin.problem import MAX_N_CUSTOMERS, Customer

MAX_ROUTE_SIZE = MAX_N_CUSTOMERS + 2


class Route:
    """An ordered sequence of customers framed by two depot copies."""

    def __init__(self) -> None:
        self.customers: list[Customer] = []

    @classmethod
    def from_customers(cls, depot: Customer, customers: Iterable[Customer]) -> Route:
        """Build a route visiting ``customers`` between two fresh depot copies."""
        route = cls()
        body = list(customers)
        if len(body) + 2 > MAX_ROUTE_SIZE:
            raise ValueError(
                f"too many customers in a route: {len(body)} > {MAX_N_CUSTOMERS}"
            )
        route.customers = [depot.dup(), *body, depot.dup()]
        route.refresh_metadata_from(0)
        route.check()
        return route

    def __len__(self) -> int:
        return len(self.customers)

    def __iter__(self) -> Iterator[Customer]:
        return iter(self.customers)

    def non_depot_size(self) -> int:
        """Number of customers, not counting the two depots."""
        return len(self.customers) - 2

    def depot_head(self) -> Customer:
        """The depot the route starts from."""
        return self.customers[0]

    def depot_tail(self) -> Customer:
        """The depot the route ends at."""
        return self.customers[-1]

    def refresh_metadata_from(self, start_idx: int) -> None:
        """Point customers from ``start_idx`` on at this route and their index."""
        for i in range(max(start_idx, 0), len(self.customers)):
            customer = self.customers[i]
            customer.route = self
            customer.idx = i

    def check(self) -> None:
        """Raise ValueError if the route's structure is inconsistent."""
        if len(self.customers) < 2:
            raise ValueError("a route must hold at least the two depots")
        if self.depot_head().id != 0 or self.depot_tail().id != 0:
            raise ValueError("a route must start and end at the depot")
        for i, customer in enumerate(self.customers):
            if customer.route is not self:
                raise ValueError(f"customer {customer.id} points at another route")
            if customer.idx != i:
                raise ValueError(
                    f"customer {customer.id} has index {customer.idx}, expected {i}"
                )

    def insert_customer(self, idx: int, customer: Customer) -> None:
        """Insert ``customer`` at position ``idx``."""
        if not 0 <= idx <= len(self.customers):
            raise IndexError(f"insert position {idx} out of range")
        if len(self.customers) >= MAX_ROUTE_SIZE:
            raise ValueError("route is full")
        self.customers.insert(idx, customer)
        self.refresh_metadata_from(idx)

    def remove_customer(self, idx: int) -> Customer:
        """Remove and return the customer at ``idx``; it then belongs to no route."""
        if not 0 <= idx < len(self.customers):
            raise IndexError(f"remove position {idx} out of range")
        removed = self.customers.pop(idx)
        self.refresh_metadata_from(idx)
        removed.route = None
        removed.idx = -1
        return removed

    def dup(self) -> Route:
        """A route with copies of all customers, in the same order."""
        copy = Route()
        copy.customers = [c.dup() for c in self.customers]
        copy.refresh_metadata_from(0)
        copy.check()
        return copy

    def find_customer_by_id(self, customer_id: int) -> Customer | None:
        """The non-depot customer with ``customer_id``, or None."""
        if customer_id == 0:
            return None
        return next(
            (c for c in self.customers[1:-1] if c.id == customer_id), None
        )


def route_prev(customer: Customer) -> Customer:
    """The customer visited just before ``customer`` in its route."""
    if customer.route is None:
        raise ValueError(f"customer {customer.id} belongs to no route")
    if customer.idx <= 0:
        raise IndexError("the head depot has no predecessor")
    return customer.route.customers[customer.idx - 1]


def route_next(customer: Customer) -> Customer:
    """The customer visited just after ``customer`` in its route."""
    if customer.route is None:
        raise ValueError(f"customer {customer.id} belongs to no route")
    if customer.idx + 1 >= len(customer.route):
        raise IndexError("the tail depot has no successor")
    return customer.route.customers[customer.idx + 1]