from __future__ import annotations
from typing import Optional, TextIO, Union

from calcparse import automaton
from calcparse.ast import Nonterm, Symbol, Terminal, Token
from calcparse.errors import MalformedReduction
from calcparse.grammar import (
    AcceptAction,
    ErrorAction,
    LookaheadTag,
    Production,
    ReduceAction,
    ShiftAction,
    eoi,
)
from calcparse.interfaces import Parser, Spec, TokenSource
from calcparse.scanner import Lexer


class Lr(Parser):
    """
    SLR(1) parser driver.  The Lr class pulls tokens from a token source
    and drives the automaton of a Spec instance until it accepts, building
    and evaluating the parse tree on the way.

    The source is either a TokenSource (for instance a TokenStream of
    pre-built tokens), or a string or readable text stream, in which case a
    Lexer is created for it.  The parser keeps a stack of states and a
    stack of symbols; the state stack always holds one more entry than the
    symbol stack, since the start state has no symbol.
    """

    _spec: Spec
    _source: TokenSource
    _states: list[int]
    _symbols: list[Symbol]
    _lookahead: Optional[Token]

    def __init__(
        self,
        source: Union[TokenSource, str, TextIO],
        spec: Optional[Spec] = None,
    ) -> None:
        if spec is None:
            spec = automaton.Spec.default()
        if not isinstance(source, TokenSource):
            source = Lexer(source)
        self._spec = spec
        self._source = source
        self.reset()
        self.verbose = False

    @property
    def spec(self) -> Spec:
        return self._spec

    @property
    def source(self) -> TokenSource:
        return self._source

    def reset(self) -> None:
        self._states = [self._spec.start_state]
        self._symbols = []
        self._lookahead = None

    def run(self) -> Nonterm:
        """Parse the whole input and return the root of the parse tree.
        Errors from the token source and the productions propagate
        unchanged."""
        self.reset()
        self._advance()

        while True:
            tag: LookaheadTag
            if self._lookahead is None:
                tag = eoi
            else:
                tag = self._lookahead.tag
            action = self._spec.action(self._states[-1], tag)

            if self.verbose:
                self._printStack()
                print("INPUT: %r" % tag)
                print("   --> %r" % action)

            if isinstance(action, ShiftAction):
                assert self._lookahead is not None
                self._states.append(action.nextState)
                self._symbols.append(Terminal(self._lookahead))
                self._advance()
            elif isinstance(action, ReduceAction):
                self._reduce(action.production)
            elif isinstance(action, AcceptAction):
                break
            else:
                assert isinstance(action, ErrorAction)
                raise action.errorType(action.message, *self._source.position)

        assert len(self._symbols) == 1
        root = self._symbols[0]
        assert isinstance(root, Nonterm)
        return root

    def _advance(self) -> None:
        self._lookahead = self._source.scan()

    def _printStack(self) -> None:
        names = ["<S>"] + [self._symName(sym) for sym in self._symbols]
        print("STACK:", end=" ")
        for name in names:
            print(name, end=" ")
        print()
        print("      ", end=" ")
        for name, state in zip(names, self._states):
            pad = " " * (len(name) - len(repr(state)))
            print("%r%s" % (state, pad), end=" ")
        print()

    @staticmethod
    def _symName(sym: Symbol) -> str:
        if isinstance(sym, (Terminal, Nonterm)):
            return str(sym.tag.value)
        return type(sym).__name__

    def _reduce(self, production: Production) -> None:
        nRhs = production.length
        if nRhs > len(self._symbols):
            raise MalformedReduction(
                "Cannot reduce %r with %d symbols on the stack"
                % (production, len(self._symbols))
            )
        rhs = self._symbols[len(self._symbols) - nRhs:]

        del self._symbols[len(self._symbols) - nRhs:]
        del self._states[len(self._states) - nRhs:]

        top = self._states[-1]
        self._states.append(self._spec.goto(top, production.lhs))
        self._symbols.append(production.reduce(rhs))


def parse(source: Union[str, TextIO]) -> Nonterm:
    """Parse and evaluate an expression; the result's value attribute is
    the value of the whole expression."""
    return Lr(source).run()
