import pytest

from lox.errors import AlreadyDefined, UndefinedVariable
from lox.types.environment import Environment


@pytest.fixture
def globals_env():
    env = Environment()
    env.define("x", 42.0)
    env.define("y", "hello")
    return env


def test_define_and_lookup(globals_env):
    assert globals_env.lookup("x") == 42.0
    assert globals_env.lookup("y") == "hello"
    assert globals_env.is_global


def test_lookup_walks_outwards(globals_env):
    inner = Environment(outer=Environment(outer=globals_env))
    assert inner.lookup("x") == 42.0
    assert inner.find("x") is globals_env
    assert inner.depth() == 2


def test_lookup_unbound(globals_env):
    with pytest.raises(UndefinedVariable) as exc:
        Environment(outer=globals_env).lookup("z", 7)
    assert exc.value.message == "Undefined variable 'z'."
    assert exc.value.line == 7


def test_assign_updates_nearest_binding(globals_env):
    middle = Environment(outer=globals_env)
    middle.define("x", 1.0)
    inner = Environment(outer=middle)
    inner.assign("x", 2.0)
    assert middle.vars["x"] == 2.0
    assert globals_env.vars["x"] == 42.0
    inner.assign("y", "bye")
    assert globals_env.vars["y"] == "bye"


def test_assign_never_creates_binding(globals_env):
    inner = Environment(outer=globals_env)
    with pytest.raises(UndefinedVariable):
        inner.assign("fresh", 1.0)
    assert inner.find("fresh") is None


def test_shadowing_does_not_touch_outer(globals_env):
    inner = Environment(outer=globals_env)
    inner.define("x", "shadow")
    assert inner.lookup("x") == "shadow"
    assert globals_env.lookup("x") == 42.0


def test_redefinition_rules(globals_env):
    globals_env.define("x", 1.0)
    assert globals_env.lookup("x") == 1.0

    local = Environment(outer=globals_env)
    local.define("a", 1.0)
    with pytest.raises(AlreadyDefined):
        local.define("a", 2.0, line=4)


def test_str_and_repr(globals_env):
    inner = Environment(outer=globals_env)
    inner.define("z", True)
    assert str(inner) == "{z: True} -> ..."
    assert repr(inner) == "<Environment chain: {z: True} -> {x: 42.0, y: 'hello'}>"


def test_resolved_access_uses_exactly_one_scope(globals_env):
    middle = Environment(outer=globals_env)
    middle.define("x", "middle")
    inner = Environment(outer=middle)
    inner.define("x", "inner")
    assert inner.ancestor(0) is inner
    assert inner.ancestor(2) is globals_env
    assert inner.global_scope() is globals_env
    assert inner.get_at(1, "x") == "middle"

    inner.assign_at(2, "x", 0.0)
    assert globals_env.lookup("x") == 0.0
    assert inner.lookup("x") == "inner"

    with pytest.raises(UndefinedVariable) as exc:
        inner.get_at(1, "y", 5)
    assert exc.value.line == 5
    with pytest.raises(UndefinedVariable):
        inner.assign_at(0, "y", 1.0)
