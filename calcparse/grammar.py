# ============================================================================
# Copyright (c) 2007 Jason Evans <jasone@canonware.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ============================================================================
"""
This module contains the classes that describe the grammar and the parsing
table: the end-of-input pseudo tag, productions, and the actions a state can
take on a lookahead.
"""

from __future__ import annotations
from typing import Any, Callable, Sequence, Tuple, Type, Union

from calcparse.ast import (
    Nonterm,
    NonterminalTag,
    Symbol,
    TerminalTag,
)
from calcparse.errors import ParseError


# <$>.
class EndOfInput:
    """The lookahead tag used once the token source is exhausted.  Only the
    module-level instance, eoi, is ever used."""

    def __repr__(self) -> str:
        return "<$>"

    __str__ = __repr__


eoi = EndOfInput()

# Anything a state can be asked to act upon.
LookaheadTag = Union[TerminalTag, EndOfInput]

# A production's body, as tags.
Body = Tuple[Union[TerminalTag, NonterminalTag], ...]


class Production:
    """
    A production pairs a head and a body with a semantic action.  The action
    receives the popped symbols in body order and returns the Nonterm that
    replaces them.
    """

    def __init__(
        self,
        seq: int,
        lhs: NonterminalTag,
        rhs: Body,
        method: Callable[[Sequence[Symbol]], Nonterm],
    ) -> None:
        self.seq = seq
        self.lhs = lhs
        self.rhs = rhs
        self.method = method

    @property
    def length(self) -> int:
        return len(self.rhs)

    def reduce(self, children: Sequence[Symbol]) -> Nonterm:
        return self.method(children)

    def __hash__(self) -> int:
        return self.seq

    def __eq__(self, other: Any) -> bool:
        if type(other) is Production:
            return self.seq == other.seq
        else:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if type(other) is Production:
            return self.seq < other.seq
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return "%s ::= %s." % (
            self.lhs.value,
            " ".join(sym.value for sym in self.rhs),
        )


class Action:
    """
    Abstract base class, subclassed by {Shift,Reduce,Accept,Error}Action."""

    def __init__(self) -> None:
        pass


class ShiftAction(Action):
    """
    Shift action, with assocated nextState."""

    def __init__(self, nextState: int) -> None:
        super().__init__()
        self.nextState = nextState

    def __repr__(self) -> str:
        return "[shift %r]" % self.nextState

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ShiftAction):
            return False
        if self.nextState != other.nextState:
            return False
        return True


class ReduceAction(Action):
    """
    Reduce action, with associated production."""

    def __init__(self, production: Production) -> None:
        super().__init__()
        self.production = production

    def __repr__(self) -> str:
        return "[reduce %r]" % self.production

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReduceAction):
            return False
        if self.production != other.production:
            return False
        return True


class AcceptAction(Action):
    def __repr__(self) -> str:
        return "[accept]"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, AcceptAction)


class ErrorAction(Action):
    """
    Error action, with the exception class to raise and the message naming
    the grammatical context."""

    def __init__(self, errorType: Type[ParseError], message: str) -> None:
        super().__init__()
        self.errorType = errorType
        self.message = message

    def __repr__(self) -> str:
        return "[%s %r]" % (self.errorType.__name__, self.message)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ErrorAction):
            return False
        return (
            self.errorType is other.errorType
            and self.message == other.message
        )
