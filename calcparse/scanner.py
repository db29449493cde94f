"""
Character-level scanning of expressions into Tokens.

The Lexer reads its input one character at a time and keeps the current
character as a one character lookahead.  Recognition of signs is context
sensitive: after a number, '+' and '-' are first tried as operators; in any
other position they are first tried as the sign of a number.  A sign that
turns out to begin no number is handed back as an operator token, so that

    3+^4  ->  NUMBER(3) PLUS POWER NUMBER(4)
    10e-1+-2  ->  NUMBER(1.0) PLUS NUMBER(-2)

Positions are 1-based.  `character` is the position of the lookahead
character, so after a token has been scanned it points just past it.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Optional, TextIO, Union

import io
import math

from calcparse.ast import TerminalTag, Token
from calcparse.errors import (
    EmptyNumber,
    IllegalCharacter,
    IncompleteCosine,
    LeadingZero,
    MissingInteger,
)
from calcparse.interfaces import TokenSource


DIGITS = "0123456789"
SIGNS = "+-"

OPERATORS = {
    "+": TerminalTag.PLUS,
    "-": TerminalTag.MINUS,
    "^": TerminalTag.POWER,
    "!": TerminalTag.FACTORIAL,
}


class Lexer(TokenSource):
    """
    Turns a string or a readable text stream into Tokens.  scan() returns
    the next token or None at end of input, and raises a LexError subclass
    on illegal input.  The stream is only read; opening and closing it is
    the caller's business.
    """

    def __init__(self, source: Union[str, TextIO]) -> None:
        if isinstance(source, str):
            source = io.StringIO(source)
        self._reader = source
        self._peek: Optional[str] = None
        # Whether the last token scanned was a NUMBER.
        self._wasNumber = False
        self.line = 1
        self.character = 0
        self._read()

    @property
    def position(self) -> tuple[int, int]:
        return (self.line, self.character)

    def _read(self) -> None:
        c = self._reader.read(1)
        self._peek = c if c else None
        self.character += 1

    def _readExpecting(self, expected: str) -> bool:
        self._read()
        return self._peek == expected

    def _atDigit(self) -> bool:
        return self._peek is not None and self._peek in DIGITS

    def _skipWhitespace(self) -> None:
        while self._peek is not None and self._peek.isspace():
            if self._peek == "\n":
                self.line += 1
                self.character = 0
            self._read()

    def _integer(self) -> Optional[int]:
        """An unsigned integer without leading zeros, or None if the input
        does not start with a digit."""
        if not self._atDigit():
            return None
        assert self._peek is not None
        value = int(self._peek)
        isZero = value == 0
        self._read()
        while self._atDigit():
            assert self._peek is not None
            if isZero:
                raise LeadingZero("Illegal leading zero.", *self.position)
            value = 10 * value + int(self._peek)
            self._read()
        return value

    def _signedInteger(self) -> Optional[int]:
        sign = None
        if self._peek is not None and self._peek in SIGNS:
            sign = self._peek
            self._read()
        integer = self._integer()
        if integer is None:
            if sign is not None:
                raise MissingInteger(
                    "Sign without a following integer.", *self.position
                )
            return None
        return -integer if sign == "-" else integer

    def _fraction(self) -> Optional[float]:
        """The digits after a decimal point, or None if there are none."""
        if not self._atDigit():
            return None
        value = 0.0
        divisor = 10
        while self._atDigit():
            assert self._peek is not None
            value += int(self._peek) / divisor
            divisor *= 10
            self._read()
        return value

    def _number(self) -> Optional[Token]:
        """
        A NUMBER token, None if the input does not start a number, or an
        operator token if a sign starts no number.
        """
        sign = None
        if self._peek is not None and self._peek in SIGNS:
            sign = self._peek
            self._read()

        integer = self._integer()

        fraction = None
        fractional = self._peek == "."
        if fractional:
            self._read()
            fraction = self._fraction()

        if integer is None:
            if fractional and fraction is None:
                raise EmptyNumber("Illegal empty number.", *self.position)
            elif not fractional:
                if sign is not None:
                    # The sign has already been read.
                    return Token(OPERATORS[sign])
                return None

        exponent = None
        if self._peek == "e":
            self._read()
            exponent = self._signedInteger()
            if exponent is None:
                raise MissingInteger(
                    "Missing exponent after 'e'.", *self.position
                )

        try:
            value = (integer or 0) + (fraction or 0.0)
            if exponent is not None and value:
                value *= 10.0**exponent
        except OverflowError:
            value = math.inf
        if sign == "-":
            value = -value
        return Token.number(value)

    def _operator(self) -> Optional[Token]:
        if self._peek is None or self._peek not in OPERATORS:
            return None
        token = Token(OPERATORS[self._peek])
        self._read()
        return token

    def _cosine(self) -> Optional[Token]:
        if self._peek != "c":
            return None
        if not (self._readExpecting("o") and self._readExpecting("s")):
            raise IncompleteCosine(
                "'c' should be a prefix to \"cos\".", *self.position
            )
        self._read()
        return Token(TerminalTag.COSINE)

    def scan(self) -> Optional[Token]:
        self._skipWhitespace()
        if self._peek is None:
            return None

        if self._wasNumber:
            token = self._operator() or self._number()
        else:
            token = self._number() or self._operator()
        if token is None:
            token = self._cosine()
        if token is None:
            raise IllegalCharacter("Illegal character.", *self.position)

        self._wasNumber = token.tag is TerminalTag.NUMBER
        return token

    def complete_scan(self) -> List[Token]:
        """All the remaining tokens."""
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.scan()
            if token is None:
                return
            yield token


class TokenStream(TokenSource):
    """
    A token source over pre-built tokens, for driving a parser without a
    lexer.  It has no notion of position, so parse errors raised while
    reading from it carry none.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)

    @property
    def position(self) -> tuple[None, None]:
        return (None, None)

    def scan(self) -> Optional[Token]:
        return next(self._tokens, None)


def tokenize(text: str) -> List[Token]:
    return Lexer(text).complete_scan()
