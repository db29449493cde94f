"""
The six productions of the expression grammar, indexed as in the parsing
table:

    0  E ::= E + E.
    1  E ::= E - E.
    2  E ::= E ^ E.
    3  E ::= cos E.
    4  E ::= E !.
    5  E ::= number.

Each semantic action checks that its children have the shape of the
production body before computing the value of the new Nonterm.  A mismatch
raises MalformedReduction, which can only be caused by a bad table.
"""

from __future__ import annotations
from typing import Sequence

import math

from calcparse.ast import (
    Nonterm,
    NonterminalTag,
    Symbol,
    Terminal,
    TerminalTag,
)
from calcparse.errors import IllegalFactorial, MalformedReduction
from calcparse.grammar import Body, Production


# Maximum distance of a factorial operand from a non-negative integer.
FACTORIAL_EPSILON = 1e-6

E = NonterminalTag.EXPRESSION


def factorial(value: float) -> float:
    """
    The product of the integers from 2 up to value, which must be within
    FACTORIAL_EPSILON of a non-negative integer.  Large operands overflow
    to infinity."""
    if not math.isfinite(value):
        n = -1
    else:
        n = round(value)
    if n < 0 or abs(value - n) > FACTORIAL_EPSILON:
        raise IllegalFactorial(
            "Factorial operand %g is not a non-negative integer." % value
        )
    result = 1.0
    for i in range(2, n + 1):
        result *= i
        if result == math.inf:
            break
    return result


def _check(children: Sequence[Symbol], body: Body) -> None:
    if len(children) != len(body):
        raise MalformedReduction(
            "Expected %d children for %s, got %d."
            % (len(body), " ".join(s.value for s in body), len(children))
        )
    for i, (child, expected) in enumerate(zip(children, body)):
        if isinstance(expected, NonterminalTag):
            ok = isinstance(child, Nonterm) and child.tag is expected
        else:
            ok = isinstance(child, Terminal) and child.tag is expected
        if not ok:
            raise MalformedReduction(
                "Child %d should be %r, got %r." % (i, expected, child)
            )


def _value(sym: Symbol) -> float:
    assert isinstance(sym, Nonterm)
    return sym.value


def reduce_plus(children: Sequence[Symbol]) -> Nonterm:
    _check(children, PLUS_BODY)
    return Nonterm(
        E, children, _value(children[0]) + _value(children[2])
    )


def reduce_minus(children: Sequence[Symbol]) -> Nonterm:
    _check(children, MINUS_BODY)
    return Nonterm(
        E, children, _value(children[0]) - _value(children[2])
    )


def reduce_power(children: Sequence[Symbol]) -> Nonterm:
    _check(children, POWER_BODY)
    base, exponent = _value(children[0]), _value(children[2])
    # Real power; NaN and infinity propagate instead of raising.
    try:
        value = math.pow(base, exponent)
    except ValueError:
        # Zero to a negative power, or a negative base to a fraction.
        value = math.inf if base == 0 else math.nan
    except OverflowError:
        value = math.copysign(math.inf, base) if exponent % 2 else math.inf
    return Nonterm(E, children, value)


def reduce_cosine(children: Sequence[Symbol]) -> Nonterm:
    _check(children, COSINE_BODY)
    operand = _value(children[1])
    # cos() raises on infinities.
    value = math.cos(operand) if math.isfinite(operand) else math.nan
    return Nonterm(E, children, value)


def reduce_factorial(children: Sequence[Symbol]) -> Nonterm:
    _check(children, FACTORIAL_BODY)
    return Nonterm(E, children, factorial(_value(children[0])))


def reduce_number(children: Sequence[Symbol]) -> Nonterm:
    _check(children, NUMBER_BODY)
    token = children[0]
    assert isinstance(token, Terminal) and token.token.value is not None
    return Nonterm(E, children, token.token.value)


PLUS_BODY: Body = (E, TerminalTag.PLUS, E)
MINUS_BODY: Body = (E, TerminalTag.MINUS, E)
POWER_BODY: Body = (E, TerminalTag.POWER, E)
COSINE_BODY: Body = (TerminalTag.COSINE, E)
FACTORIAL_BODY: Body = (E, TerminalTag.FACTORIAL)
NUMBER_BODY: Body = (TerminalTag.NUMBER,)

PRODUCTIONS: tuple[Production, ...] = (
    Production(0, E, PLUS_BODY, reduce_plus),
    Production(1, E, MINUS_BODY, reduce_minus),
    Production(2, E, POWER_BODY, reduce_power),
    Production(3, E, COSINE_BODY, reduce_cosine),
    Production(4, E, FACTORIAL_BODY, reduce_factorial),
    Production(5, E, NUMBER_BODY, reduce_number),
)

(
    PLUS,
    MINUS,
    POWER,
    COSINE,
    FACTORIAL,
    NUMBER,
) = PRODUCTIONS
