"""Local moves on routes: 2-opt, relocation, exchange, insertion, ejection."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from routemin.problem import Customer
from routemin.route import route_next, route_prev


class ModificationType(enum.Enum):
    """Kinds of local moves."""

    TWO_OPT = 0
    OUT_RELOCATE = 1
    EXCHANGE = 2
    INSERT = 3
    EJECT = 4


@dataclass
class Modification:
    """A move of kind ``type`` on customer ``v`` and, except for EJECT, ``w``.

    TWO_OPT swaps the tails after ``v`` and ``w`` between their routes.
    OUT_RELOCATE moves ``w`` to just before ``v``. EXCHANGE swaps ``v`` and
    ``w``. INSERT puts the unrouted ``w`` just before ``v``. EJECT removes
    ``v`` from its route.
    """

    type: ModificationType
    v: Customer
    w: Customer | None = None

    def applicable(self) -> bool:
        """True if the move can be applied to the current routes."""
        v, w = self.v, self.w
        v_route = v.route
        w_route = None if w is None else w.route
        kind = self.type
        if kind is ModificationType.TWO_OPT:
            if v_route is None or w_route is None or v_route is w_route:
                return False
            return v_route.depot_tail() is not v and w_route.depot_tail() is not w
        if kind is ModificationType.OUT_RELOCATE:
            if w_route is None or v_route is None:
                return False
            if v_route.depot_head() is v:
                return False
            if route_prev(v) is w:
                return False
            return self._insertable()
        if kind is ModificationType.INSERT:
            return self._insertable()
        if kind is ModificationType.EXCHANGE:
            if w is None or v.id == 0 or w.id == 0:
                return False
            return v_route is not None and w_route is not None
        if kind is ModificationType.EJECT:
            return v.id != 0 and v_route is not None
        raise ValueError(f"unknown modification type {kind!r}")

    def _insertable(self) -> bool:
        w = self.w
        if w is None or w.id == 0:
            return False
        v_route = self.v.route
        if v_route is None:
            return False
        # Insertion before a depot is allowed only at the end of the route.
        return v_route.depot_head() is not self.v

    def apply(self) -> None:
        """Carry out the move; raise ValueError if it is not applicable."""
        if not self.applicable():
            raise ValueError(f"{self.type.name} is not applicable")
        v, w = self.v, self.w
        v_route = v.route
        w_route = None if w is None else w.route
        kind = self.type

        if kind is ModificationType.TWO_OPT:
            v_cut = v.idx + 1
            w_cut = w.idx + 1
            v_tail = v_route.customers[v_cut:]
            w_tail = w_route.customers[w_cut:]
            v_route.customers[v_cut:] = w_tail
            w_route.customers[w_cut:] = v_tail
            v_route.refresh_metadata_from(v_cut)
            w_route.refresh_metadata_from(w_cut)
            v_route.check()
            w_route.check()
        elif kind is ModificationType.OUT_RELOCATE:
            if v is w:
                return
            src_idx = w.idx
            dst_idx = v.idx
            w_route.remove_customer(src_idx)
            if v_route is w_route and src_idx < dst_idx:
                dst_idx -= 1
            v_route.insert_customer(dst_idx, w)
            v_route.check()
            w_route.check()
        elif kind is ModificationType.EXCHANGE:
            if v is w:
                return
            v_idx, w_idx = v.idx, w.idx
            v_route.customers[v_idx] = w
            w_route.customers[w_idx] = v
            v_route.refresh_metadata_from(v_idx)
            if v_route is w_route:
                w_route.refresh_metadata_from(min(v_idx, w_idx))
            else:
                w_route.refresh_metadata_from(w_idx)
            v_route.check()
            w_route.check()
        elif kind is ModificationType.INSERT:
            if w_route is not None:
                raise ValueError(f"customer {w.id} already belongs to a route")
            v_route.insert_customer(v.idx, w)
            v_route.check()
        elif kind is ModificationType.EJECT:
            v_route.remove_customer(v.idx)
            v_route.check()
        else:
            raise ValueError(f"unknown modification type {kind!r}")

    def neighbours(self) -> tuple[Customer, Customer]:
        """The customers just before and just after ``v`` in its route."""
        return route_prev(self.v), route_next(self.v)