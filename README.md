# routemin

Building blocks for a route-minimisation heuristic for the vehicle routing
problem with time windows (VRPTW). The package includes the following:

- a reader for benchmark problem files (`routemin.problem`)
- route bookkeeping (`routemin.route`)
- local-search moves on routes (`routemin.modification`)
- a reproducible xoshiro256++ random generator (`routemin.prng`, `routemin.random_utils`)
- plain-text logging (`routemin.say`)
- chained diagnostics (`routemin.diag`)
- runtime type descriptors (`routemin.reflection`)

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the test suite, install the `test` extra and then run pytest:

```
pip install ".[test]"
pytest
```

## Reading a problem

The input is the usual plain-text benchmark layout, in this order:

1. a test name
2. a `VEHICLE` / `NUMBER CAPACITY` section
3. a `CUSTOMER` table whose first row, with id 0, is the depot

```python
from routemin.problem import decode_problem

problem = decode_problem("c1_2_1.txt")
print(problem.n_customers)            # customers, not counting the depot
print(problem.distance(0, 1))         # Euclidean distance between ids 0 and 1
print(problem.routes_straight_lower_bound())  # ceil(total demand / capacity)
```

`parse_problem(text)` does the same for a string. Reading customers stops at
the end of the input, or at the first token that is not an integer id. The
parser raises `ProblemFormatError` (a `ValueError`) in these cases:

- a header word is wrong
- a number cannot be read
- the depot id is not 0
- the customer ids are not exactly 1..n
- there are more than 2000 customers

Each `Customer` has these fields:

- `id`, `x`, `y` and `demand`
- `ready_time`, `due_date` and `service_time`
- `route` and `idx`, the route the customer is on and its index there

`Customer.dup()` gives a copy that belongs to no route.

## Routes and modifications

```python
from routemin.route import Route
from routemin.modification import Modification, ModificationType

customers = problem.customers_dup()
first = Route.from_customers(problem.depot, customers[:3])
second = Route.from_customers(problem.depot, customers[3:6])

move = Modification(ModificationType.EXCHANGE, customers[0], customers[3])
if move.applicable():
    move.apply()
```

A route always begins and ends with a copy of the depot. `Route.check()`
raises `ValueError` if that is not so, or if any customer's `route` or `idx`
is wrong. `insert_customer`, `remove_customer` and `refresh_metadata_from`
keep those fields up to date. `route_prev` and `route_next` return a
customer's neighbours.

The move types are:

| Type | What it does |
|------|--------------|
| `TWO_OPT` | Swaps the tails after `v` and `w` between two different routes. |
| `OUT_RELOCATE` | Moves `w` to just before `v`. |
| `EXCHANGE` | Swaps `v` and `w`. |
| `INSERT` | Puts an unrouted `w` just before `v`. |
| `EJECT` | Removes `v` from its route. |

`Modification.apply()` raises `ValueError` when the move is not applicable.

## Reproducible randomness

```python
from routemin.prng import Xoshiro256
from routemin.random_utils import random_shuffle

rng = Xoshiro256.from_seed(42)
print(rng.randint(1, 6))
random_shuffle(customers, rng)
```

`Xoshiro256.from_seed` expands a 64-bit seed with SplitMix64, so the same seed
always gives the same sequence. `Xoshiro256.from_entropy()` seeds the
generator from the operating system.

There is also a shared module-level generator:

- `random_init()` seeds it from the operating system.
- `pseudo_random_seed(seed)` seeds it from a fixed seed.
- `xoshiro_random()` and `pseudo_random_in_range(low, high)` draw from it.

`random_subset` and `random_shuffle` use the shared generator when no `rng` is
given. `random_subset(items, k)` moves a random choice of `k` items to the
front of the list.

## Logging and diagnostics

`routemin.say.say(error, message, filename, line, stream)` writes one log
line to the stream, stderr by default. The other logging helpers are:

- `syserror` adds the description of an error number.
- `panic` logs a message and exits.

`routemin.diag` provides `DiagError`, an exception with a file, a line and a
code. Errors chain through `set_prev`, and `chain()` yields an error followed
by its causes. A `Diag` area holds the latest error. `diag_get()` returns the
current thread's area.

## Type descriptors

`routemin.reflection` provides `make_type` and `make_method` for building type
descriptors with single inheritance and named methods. `method_invoke` calls a
method after checking its argument types against the declared `CType`s.

## What this package does not do

The package provides the parts, not a solver. It has none of the following:

- a command-line program
- penalty or cost evaluation of routes or moves
- a search loop that reduces the number of routes
- output of solutions to files