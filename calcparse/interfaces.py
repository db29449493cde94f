"""
This module declares the abstract interfaces that the parser driver is
written against, so that a table, a token source or a driver can be
substituted independently.
"""

from __future__ import annotations
from typing import TextIO, Union

import abc

from calcparse.ast import Nonterm, NonterminalTag, Token
from calcparse.grammar import Action, LookaheadTag


class TokenSource(abc.ABC):
    @abc.abstractmethod
    def scan(self) -> Token | None:
        """Return the next token, or None at end of input."""
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def position(self) -> tuple[int | None, int | None]:
        """The current (line, character), used to position parse errors."""
        raise NotImplementedError


class Spec(abc.ABC):
    @abc.abstractmethod
    def action(self, state: int, tag: LookaheadTag) -> Action:
        raise NotImplementedError

    @abc.abstractmethod
    def goto(self, state: int, tag: NonterminalTag) -> int:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def start_state(self) -> int:
        raise NotImplementedError


class Parser(abc.ABC):
    def __init__(
        self,
        source: Union[TokenSource, str, TextIO],
        spec: Spec | None = None,
    ) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def run(self) -> Nonterm:
        raise NotImplementedError
