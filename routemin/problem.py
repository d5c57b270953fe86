"""The routing problem: depot, customers, vehicle capacity and distances.

Problems are read from the plain-text benchmark layout: a test name, a
vehicle section with the number and capacity of vehicles, and a customer
table whose first row (id 0) is the depot.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

MAX_N_CUSTOMERS = 2000

_VEHICLE_HEADER = ("VEHICLE", "NUMBER", "CAPACITY")
_CUSTOMER_HEADER = (
    "CUSTOMER", "CUST", "NO.", "XCOORD.",
    "YCOORD.", "DEMAND", "READY", "TIME",
    "DUE", "DATE", "SERVICE", "TIME",
)


class ProblemFormatError(ValueError):
    """The problem description is malformed."""


@dataclass(eq=False)
class Customer:
    """A customer (or the depot, id 0) and its place in a route."""

    id: int
    x: float = 0.0
    y: float = 0.0
    demand: float = 0.0
    ready_time: float = 0.0
    due_date: float = 0.0
    service_time: float = 0.0
    route: Any = field(default=None, repr=False)
    idx: int = -1

    def dup(self) -> Customer:
        """A copy of this customer that belongs to no route."""
        return replace(self, route=None, idx=-1)


def customer_distance(lhs: Customer, rhs: Customer) -> float:
    """Euclidean distance between two customers."""
    return math.hypot(lhs.x - rhs.x, lhs.y - rhs.y)


class Problem:
    """A problem instance with a precomputed distance matrix indexed by id."""

    def __init__(self, vc: float, depot: Customer, customers: Iterable[Customer]) -> None:
        self.vc = vc
        self.depot = depot
        self.customers: list[Customer] = list(customers)
        self.distance_matrix: list[list[float]] = []
        self.init_distance_matrix()

    @property
    def n_customers(self) -> int:
        """Number of customers, not counting the depot."""
        return len(self.customers)

    def distance(self, i: int, j: int) -> float:
        """Distance between the customers with ids ``i`` and ``j``."""
        return self.distance_matrix[i][j]

    def init_distance_matrix(self) -> None:
        """Recompute all pairwise distances.

        Customer ids must be exactly 1..n and the depot id must be 0.
        """
        n = self.n_customers
        if n > MAX_N_CUSTOMERS:
            raise ProblemFormatError(
                f"too many customers: {n} > {MAX_N_CUSTOMERS}"
            )
        by_id: dict[int, Customer] = {0: self.depot}
        for c in self.customers:
            if c.id in by_id:
                raise ProblemFormatError(f"duplicate customer id {c.id}")
            by_id[c.id] = c
        missing = [i for i in range(n + 1) if i not in by_id]
        if missing:
            raise ProblemFormatError(f"customer ids are not 0..{n}: missing {missing}")
        ordered = [by_id[i] for i in range(n + 1)]
        self.distance_matrix = [
            [customer_distance(a, b) for b in ordered] for a in ordered
        ]

    def customers_dup(self) -> list[Customer]:
        """Fresh copies of all customers, in problem order."""
        return [c.dup() for c in self.customers]

    def routes_straight_lower_bound(self) -> int:
        """Total demand divided by vehicle capacity, rounded up."""
        return math.ceil(sum(c.demand for c in self.customers) / self.vc)


def _next(tokens: Iterator[str], what: str) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise ProblemFormatError(f"unexpected end of input, expected {what}") from None


def _expect_words(tokens: Iterator[str], words: Iterable[str]) -> None:
    for expected in words:
        word = _next(tokens, repr(expected))
        if word != expected:
            raise ProblemFormatError(f"expected {expected!r}, got {word!r}")


def _number(tokens: Iterator[str], what: str, kind: type = float) -> Any:
    token = _next(tokens, what)
    try:
        return kind(token)
    except ValueError:
        raise ProblemFormatError(f"invalid {what}: {token!r}") from None


def _read_customer(tokens: Iterator[str], customer_id: int) -> Customer:
    return Customer(
        customer_id,
        x=_number(tokens, "x coordinate"),
        y=_number(tokens, "y coordinate"),
        demand=_number(tokens, "demand"),
        ready_time=_number(tokens, "ready time"),
        due_date=_number(tokens, "due date"),
        service_time=_number(tokens, "service time"),
    )


def parse_problem(text: str) -> Problem:
    """Parse a problem description.

    Reading of customers stops at the end of input or at the first token
    that is not an integer id.
    """
    tokens = iter(text.split())
    _next(tokens, "test name")
    _expect_words(tokens, _VEHICLE_HEADER)
    _number(tokens, "number of vehicles", int)
    vc = _number(tokens, "vehicle capacity")
    _expect_words(tokens, _CUSTOMER_HEADER)
    depot_id = _number(tokens, "depot id", int)
    if depot_id != 0:
        raise ProblemFormatError(f"depot id must be 0, got {depot_id}")
    depot = _read_customer(tokens, 0)
    customers = []
    for token in tokens:
        try:
            customer_id = int(token)
        except ValueError:
            break
        customers.append(_read_customer(tokens, customer_id))
    return Problem(vc, depot, customers)


def decode_problem(path: str | Path) -> Problem:
    """Read and parse a problem file."""
    return parse_problem(Path(path).read_text())