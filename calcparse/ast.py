"""
The classes `Token`, `Terminal` and `Nonterm` make up the parse tree that
the parser builds.  Tokens are produced by a token source (normally the
Lexer); the parser wraps each shifted token in a Terminal, and every
reduction produces a Nonterm whose children are the popped symbols.
"""

from __future__ import annotations
from typing import Any, Sequence

import enum
import math

from mypy_extensions import mypyc_attr


# Relative tolerance used by the fuzzy_eq() methods.
TOLERANCE = 1e-6


class TerminalTag(enum.Enum):
    PLUS = "+"
    MINUS = "-"
    POWER = "^"
    COSINE = "cos"
    FACTORIAL = "!"
    NUMBER = "number"

    def __repr__(self) -> str:
        return self.name


class NonterminalTag(enum.Enum):
    EXPRESSION = "E"

    def __repr__(self) -> str:
        return self.name


def fuzzy_close(
    observed: float, expected: float, tolerance: float = TOLERANCE
) -> bool:
    """Compare two floats within a tolerance relative to the expected
    value.  Identical values (including infinities) and pairs of NaNs are
    always close."""
    if observed == expected:
        return True
    if math.isnan(observed) or math.isnan(expected):
        return math.isnan(observed) and math.isnan(expected)
    return abs(observed - expected) <= abs(expected * tolerance)


class Token:
    """
    A tagged token.  Only NUMBER tokens carry a value, which is always a
    float.  Tokens are not modified after construction.

        Token(TerminalTag.PLUS)
        Token(TerminalTag.NUMBER, 3.5)
        Token.number(3.5)
    """

    __slots__ = ("tag", "value")

    tag: TerminalTag
    value: float | None

    def __init__(self, tag: TerminalTag, value: float | None = None) -> None:
        if tag is TerminalTag.NUMBER:
            if value is None:
                raise ValueError("NUMBER tokens require a value")
            value = float(value)
        elif value is not None:
            raise ValueError("%r tokens carry no value" % tag)
        object.__setattr__(self, "tag", tag)
        object.__setattr__(self, "value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Token objects are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Token objects are immutable")

    @classmethod
    def number(cls, value: float) -> Token:
        return cls(TerminalTag.NUMBER, value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.tag is other.tag and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.tag, self.value))

    def __repr__(self) -> str:
        if self.value is None:
            return "[%s]" % self.tag.name
        return "[%s] value=%r" % (self.tag.name, self.value)

    def __str__(self) -> str:
        if self.value is None:
            return self.tag.value
        return "%g" % self.value

    def fuzzy_eq(self, other: Any, tolerance: float = TOLERANCE) -> bool:
        """Equality with NUMBER values compared within a relative
        tolerance of other's value."""
        if not isinstance(other, Token) or self.tag is not other.tag:
            return False
        if self.value is None or other.value is None:
            return self.value is other.value
        return fuzzy_close(self.value, other.value, tolerance)


@mypyc_attr(serializable=True, allow_interpreted_subclasses=True)
class Symbol:
    """
    Base class of the symbols held on the parser's symbol stack: either a
    Terminal wrapping a shifted token, or a Nonterm built by a reduction.
    """

    def fuzzy_eq(self, other: Any, tolerance: float = TOLERANCE) -> bool:
        raise NotImplementedError


class Terminal(Symbol):
    """A shifted token."""

    def __init__(self, token: Token) -> None:
        self.token = token

    @property
    def tag(self) -> TerminalTag:
        return self.token.tag

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Terminal):
            return NotImplemented
        return self.token == other.token

    def __repr__(self) -> str:
        return repr(self.token)

    def __str__(self) -> str:
        return str(self.token)

    def fuzzy_eq(self, other: Any, tolerance: float = TOLERANCE) -> bool:
        if not isinstance(other, Terminal):
            return False
        return self.token.fuzzy_eq(other.token, tolerance)


class Nonterm(Symbol):
    """
    Non-terminal symbols are created by reductions.  The children are the
    symbols of the reduced production's body, in order; the value is the
    one computed by the production's semantic action.

    str() renders the fully parenthesised expression the tree encodes:

        >>> str(calcparse.parse("1+2^3^4"))
        '(1 + (2 ^ (3 ^ 4)))'

    Nonterms are not modified after construction.
    """

    tag: NonterminalTag
    children: tuple[Symbol, ...]
    value: float

    def __init__(
        self,
        tag: NonterminalTag,
        children: Sequence[Symbol],
        value: float,
    ) -> None:
        object.__setattr__(self, "tag", tag)
        object.__setattr__(self, "children", tuple(children))
        object.__setattr__(self, "value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Nonterm objects are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Nonterm objects are immutable")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Nonterm):
            return NotImplemented
        return (
            self.tag is other.tag
            and self.children == other.children
            and (
                self.value == other.value
                or math.isnan(self.value)
                and math.isnan(other.value)
            )
        )

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return "[%s] value=%f" % (self.tag.name, self.value)

    def __str__(self) -> str:
        if len(self.children) == 1:
            return str(self.children[0])
        last = self.children[-1]
        if isinstance(last, Terminal) and last.tag is TerminalTag.FACTORIAL:
            sep = ""
        else:
            sep = " "
        return "(%s)" % sep.join(str(child) for child in self.children)

    def fuzzy_eq(self, other: Any, tolerance: float = TOLERANCE) -> bool:
        """Structural equality with values compared within a relative
        tolerance of other's values, recursively."""
        if not isinstance(other, Nonterm) or self.tag is not other.tag:
            return False
        if not fuzzy_close(self.value, other.value, tolerance):
            return False
        if len(self.children) != len(other.children):
            return False
        for mine, theirs in zip(self.children, other.children):
            if not mine.fuzzy_eq(theirs, tolerance):
                return False
        return True
