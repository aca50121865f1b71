import pytest
from hypothesis import given, settings, strategies as st

from lox.errors import DivisionByZero, TypeMismatch
from lox.interpreter import Interpreter


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2 + 3", 6),
        ("10 - 3 - 2", 5),
        ("2 * 3 * 4", 24),
        ("12 / 3", 4),
        ("(2 * 3) + (10 - 4)", 12),
        ("(20 + 10) / (2 * 5)", 3),
        ("1 + 2.5 + 3", 6.5),
        ("-1 + 5 + -3", 1),
        ("-10 - -5", -5),
        ("-2 * 3", -6),
        ("-12 / 3", -4),
        ("1 + 2 * (3 + 4) * (10 - 6)", 57),
        ("7 / 2", 3.5),
        ("--4", 4),
        ("1 < 2", True),
        ("2 <= 2", True),
        ("3 > 4", False),
        ("3 >= 4", False),
        ('"ab" + "cd"', "abcd"),
    ],
)
def test_arithmetic(interp, source, expected):
    assert interp.evaluate(source) == expected


@pytest.mark.parametrize(
    "source,error",
    [
        ("1 / 0", DivisionByZero),
        ("1 / (2 - 2)", DivisionByZero),
        ('1 + "a"', TypeMismatch),
        ("true * 2", TypeMismatch),
        ('"a" < "b"', TypeMismatch),
        ('-"a"', TypeMismatch),
    ],
)
def test_arithmetic_errors(interp, source, error):
    with pytest.raises(error):
        interp.evaluate(source)


# (text, value) pairs built side by side so the expected result never goes through Lox
_leaves = st.integers(min_value=-9, max_value=9).map(
    lambda n: (f"({n})" if n < 0 else str(n), n)
)


def _combine(children):
    ops = {
        "+": lambda a, b: a + b,
        "-": lambda a, b: a - b,
        "*": lambda a, b: a * b,
    }
    return st.tuples(children, st.sampled_from(sorted(ops)), children).map(
        lambda t: (f"({t[0][0]} {t[1]} {t[2][0]})", ops[t[1]](t[0][1], t[2][1]))
    )


@settings(max_examples=100, deadline=None)
@given(st.recursive(_leaves, _combine, max_leaves=8))
def test_integer_arithmetic_matches_python(case):
    text, value = case
    assert Interpreter().evaluate(text) == value
