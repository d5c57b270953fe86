import pytest

from routemin.reflection import (
    METHOD_ARG_MAX,
    CType,
    make_method,
    make_type,
    method_invokable,
    method_invoke,
    type_assignable,
)


class _Obj:
    def __init__(self, type_, value=0):
        self.type = type_
        self.value = value


@pytest.fixture
def hierarchy():
    base = make_type("Exception")
    system = make_type("SystemError", base)
    oom = make_type("OutOfMemory", system)
    other = make_type("IllegalParams", base)
    return base, system, oom, other


def test_type_assignable_to_self_and_ancestors(hierarchy):
    base, system, oom, _ = hierarchy
    assert type_assignable(oom, oom)
    assert type_assignable(system, oom)
    assert type_assignable(base, oom)
    assert base.is_assignable_from(system)


def test_type_not_assignable_downwards_or_sideways(hierarchy):
    base, system, oom, other = hierarchy
    assert not type_assignable(oom, system)
    assert not type_assignable(system, other)
    assert not system.is_assignable_from(base)


def test_type_assignable_none_object_raises(hierarchy):
    base = hierarchy[0]
    with pytest.raises(ValueError):
        type_assignable(base, None)


def test_types_compare_by_identity():
    first = make_type("Same")
    second = make_type("Same")
    assert not type_assignable(first, second)
    assert type_assignable(first, first)


def test_method_lookup_walks_parents():
    base = make_type("Base")
    get = make_method(base, "get", lambda o: o.value, CType.INT)
    base = make_type("Base", None, [get])
    child = make_type("Child", base)
    assert child.method_by_name("get") is get
    assert child.method_by_name("missing") is None


def test_iter_methods_order_child_first():
    parent_owner = make_type("P")
    pm = make_method(parent_owner, "name", lambda o: "p", CType.CONST_CHAR_PTR)
    parent = make_type("P", None, [pm])
    cm = make_method(parent, "name", lambda o: "c", CType.CONST_CHAR_PTR)
    extra = make_method(parent, "extra", lambda o: None)
    child = make_type("C", parent, [cm, extra])
    assert list(child.iter_methods()) == [cm, extra, pm]
    assert child.method_by_name("name") is cm


def test_make_method_records_signature(hierarchy):
    base = hierarchy[0]
    m = make_method(base, "f", lambda o, a, b: a, CType.INT,
                    [CType.INT, CType.CONST_CHAR_PTR], isconst=True)
    assert m.nargs == 2
    assert m.atypes == (CType.INT, CType.CONST_CHAR_PTR)
    assert m.isconst is True
    assert m.name == "f"


def test_make_method_too_many_arguments(hierarchy):
    base = hierarchy[0]
    with pytest.raises(ValueError):
        make_method(base, "f", lambda o, *a: None, CType.VOID,
                    [CType.INT] * (METHOD_ARG_MAX + 1))


def test_method_invokable_checks(hierarchy):
    base, system, oom, other = hierarchy
    m = make_method(system, "f", lambda o, n: n, CType.INT, [CType.INT])
    assert method_invokable(m, _Obj(oom), CType.INT, [CType.INT])
    assert not method_invokable(m, _Obj(other), CType.INT, [CType.INT])
    assert not method_invokable(m, _Obj(oom), CType.VOID, [CType.INT])
    assert not method_invokable(m, _Obj(oom), CType.INT, [])
    assert not method_invokable(m, _Obj(oom), CType.INT, [CType.CONST_CHAR_PTR])


def test_method_invokable_rejects_too_many_args(hierarchy):
    base = hierarchy[0]
    m = make_method(base, "f", lambda o: None)
    with pytest.raises(ValueError):
        method_invokable(m, _Obj(base), CType.VOID,
                         [CType.INT] * (METHOD_ARG_MAX + 1))


def test_method_invoke_calls_function(hierarchy):
    base, system, oom, _ = hierarchy
    m = make_method(system, "add", lambda o, n: o.value + n,
                    CType.INT, [CType.INT])
    assert method_invoke(m, _Obj(oom, value=40), 2) == 42


def test_method_invoke_wrong_argument_type(hierarchy):
    system = hierarchy[1]
    m = make_method(system, "add", lambda o, n: n, CType.INT, [CType.INT])
    with pytest.raises(TypeError):
        method_invoke(m, _Obj(system), "text")


def test_method_invoke_wrong_owner(hierarchy):
    _, system, _, other = hierarchy
    m = make_method(system, "f", lambda o: None)
    with pytest.raises(TypeError):
        method_invoke(m, _Obj(other))