"""Runtime type descriptors with single inheritance and named methods.

A :class:`TypeInfo` names a type, points at its parent and lists its
methods. Objects take part by carrying a ``type`` attribute that holds
their :class:`TypeInfo`.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

METHOD_ARG_MAX = 8


class CType(enum.IntEnum):
    """Primitive value types a method may take or return."""

    VOID = 0
    INT = 1
    CONST_CHAR_PTR = 2


def _ctype_of(value: Any) -> CType:
    if value is None:
        return CType.VOID
    if isinstance(value, int) and not isinstance(value, bool):
        return CType.INT
    if isinstance(value, str):
        return CType.CONST_CHAR_PTR
    raise TypeError(f"no primitive type for argument {value!r}")


@dataclass(frozen=True, eq=False)
class MethodInfo:
    """A method descriptor: owner type, name, signature and implementation."""

    owner: TypeInfo
    name: str
    func: Callable[..., Any]
    rtype: CType = CType.VOID
    atypes: tuple[CType, ...] = ()
    isconst: bool = False

    @property
    def nargs(self) -> int:
        """Number of declared arguments."""
        return len(self.atypes)


@dataclass(frozen=True, eq=False)
class TypeInfo:
    """A type descriptor. Types compare by identity."""

    name: str
    parent: TypeInfo | None = None
    methods: tuple[MethodInfo, ...] = field(default=())

    def is_assignable_from(self, other: TypeInfo) -> bool:
        """True if ``other`` is this type or derives from it."""
        return type_assignable(self, other)

    def ancestry(self) -> Iterator[TypeInfo]:
        """This type followed by its parents, nearest first."""
        current: TypeInfo | None = self
        while current is not None:
            if current.parent is current:
                raise ValueError(f"type {current.name!r} is its own parent")
            yield current
            current = current.parent

    def iter_methods(self) -> Iterator[MethodInfo]:
        """Methods of this type, then those of each parent in turn."""
        for type_ in self.ancestry():
            yield from type_.methods

    def method_by_name(self, name: str) -> MethodInfo | None:
        """The first method called ``name`` along the hierarchy, or None."""
        return next((m for m in self.iter_methods() if m.name == name), None)


def type_assignable(type_: TypeInfo, obj: TypeInfo) -> bool:
    """True if ``obj`` is ``type_`` or one of its descendants."""
    if obj is None:
        raise ValueError("object type must not be None")
    return any(candidate is type_ for candidate in obj.ancestry())


def make_type(
    name: str,
    parent: TypeInfo | None = None,
    methods: Iterable[MethodInfo] = (),
) -> TypeInfo:
    """Create a type descriptor."""
    return TypeInfo(name, parent, tuple(methods))


def make_method(
    owner: TypeInfo,
    name: str,
    func: Callable[..., Any],
    rtype: CType = CType.VOID,
    atypes: Sequence[CType] = (),
    isconst: bool = False,
) -> MethodInfo:
    """Create a method descriptor; at most ``METHOD_ARG_MAX`` arguments."""
    atypes = tuple(CType(a) for a in atypes)
    if len(atypes) > METHOD_ARG_MAX:
        raise ValueError(
            f"too many arguments: {len(atypes)} > {METHOD_ARG_MAX}"
        )
    return MethodInfo(owner, name, func, CType(rtype), atypes, isconst)


def method_invokable(
    method: MethodInfo,
    obj: Any,
    rtype: CType = CType.VOID,
    atypes: Sequence[CType] = (),
) -> bool:
    """True if ``method`` can be called on ``obj`` with this signature."""
    atypes = tuple(atypes)
    if len(atypes) > METHOD_ARG_MAX:
        raise ValueError(
            f"too many arguments: {len(atypes)} > {METHOD_ARG_MAX}"
        )
    if not type_assignable(method.owner, obj.type):
        return False
    if method.rtype != rtype:
        return False
    return method.atypes == atypes


def method_invoke(method: MethodInfo, obj: Any, *args: Any) -> Any:
    """Call ``method`` on ``obj`` after checking the argument types."""
    atypes = tuple(_ctype_of(arg) for arg in args)
    if not method_invokable(method, obj, method.rtype, atypes):
        raise TypeError(
            f"method {method.name!r} cannot be invoked on "
            f"{obj.type.name!r} with argument types {[a.name for a in atypes]}"
        )
    return method.func(obj, *args)