"""Problem reading, routes, local moves, random generation and diagnostics for the VRPTW."""

__version__ = "0.1.0"