"""
The calcparse module implements the following exception classes:

  * AnyException
  * SpecError
  * ParsingError
    * PositionedError
      * LexError (EmptyNumber, MissingInteger, LeadingZero,
                  IncompleteCosine, IllegalCharacter)
      * ParseError (ExpectedOperand, ExpectedOperator)
    * SemanticError (IllegalFactorial, MalformedReduction)
"""

from __future__ import annotations


# ============================================================================
# Begin exceptions.
#
class AnyException(Exception):
    """
    Top-level class for all exceptions thrown within the calcparse module.
    """


class SpecError(AnyException):
    """
    Specification error exception.  SpecError arises when the automaton
    table fails validation while a Spec is being built.  It always indicates
    a bug in the table, never bad input.
    """


class ParsingError(AnyException):
    """
    Top level parsing exception class, from which we derive all exceptions
    that occur during the scanning, parsing or evaluation of an input string.
    """


class PositionedError(ParsingError):
    """
    An error tied to a position in the input.  Line and character numbers
    are 1-based; both are None when the token source has no notion of
    position (see TokenStream).
    """

    def __init__(
        self,
        description: str,
        line: int | None = None,
        character: int | None = None,
    ) -> None:
        if line is None or character is None:
            message = description
        else:
            message = "[%d:%d] %s" % (line, character, description)
        super().__init__(message)
        self.description = description
        self.line = line
        self.character = character

    @property
    def position(self) -> tuple[int | None, int | None]:
        return (self.line, self.character)


class LexError(PositionedError):
    """
    Lexical error.  The lexer raises a LexError as soon as the characters
    it has irreversibly consumed cannot begin or complete a token.  Lexical
    errors are terminal: the lexer does not attempt to recover.
    """


class EmptyNumber(LexError):
    """A number has a decimal point but neither integral nor fractional
    digits."""


class MissingInteger(LexError):
    """No integer follows an exponent marker or its sign."""


class LeadingZero(LexError):
    """An integer has a digit after a leading zero."""


class IncompleteCosine(LexError):
    """'c' is not followed by "os"."""


class IllegalCharacter(LexError):
    """The current character begins no token."""


class ParseError(PositionedError):
    """
    Parser syntax error.  A ParseError arises when the automaton's action
    for the lookahead is an error action.  It is positioned at the lexer's
    position when the error is detected, which is just past the lookahead.
    """


class ExpectedOperand(ParseError):
    pass


class ExpectedOperator(ParseError):
    pass


class SemanticError(ParsingError):
    """
    Errors raised by production semantic actions.  These carry no position,
    because a completed reduction is not tied to a single lexer position.
    """

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description


class IllegalFactorial(SemanticError):
    """The operand of a factorial is negative or not an integer."""


class MalformedReduction(SemanticError):
    """
    A production was reduced over children that do not match its body.
    This can only be caused by an inconsistent automaton table.
    """


#
# End exceptions.
# ============================================================================
