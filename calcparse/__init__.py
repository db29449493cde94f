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
The calcparse module scans, parses and evaluates arithmetic expressions
over real numbers with a table driven SLR(1) parser.  The grammar is fixed:

    E ::= E + E | E - E | E ^ E | cos E | E ! | number

Numbers have an optional sign, an integer part without leading zeros, an
optional fraction and an optional exponent ("-633e-2", ".03", "67.e-3").
Precedence, from loosest to tightest, is + and - (left associative), ^
(right associative), prefix cos, and postfix !.

There are three layers, each usable on its own:

  Lexer : Turns characters into Tokens.  How a '+' or '-' is read depends on
          whether the previous token was a number: after a number it is an
          operator, elsewhere it is the sign of the following number.

  Spec : The parsing table, twelve states whose shift/reduce choices encode
         precedence and associativity.  One instance, Spec.default(), is
         shared by all parsers.

  Lr : The shift-reduce driver.  It pulls tokens from a Lexer (or any other
       TokenSource, such as a TokenStream of pre-built tokens), and every
       reduction calls the production's semantic action, which builds a
       Nonterm and computes its value.

For the common case:

    >>> tree = calcparse.parse("3+cos4!")
    >>> tree.value
    3.424...
    >>> str(tree)
    '(3 + (cos (4!)))'

Errors are reported with exceptions derived from AnyException.  Lexical
and syntax errors (LexError, ParseError) carry the line and character at
which they were detected; errors raised by semantic actions
(IllegalFactorial, MalformedReduction) carry no position.
"""

from __future__ import annotations


__all__ = (
    "AnyException",
    "EmptyNumber",
    "ExpectedOperand",
    "ExpectedOperator",
    "IllegalCharacter",
    "IllegalFactorial",
    "IncompleteCosine",
    "LeadingZero",
    "LexError",
    "Lexer",
    "Lr",
    "MalformedReduction",
    "MissingInteger",
    "Nonterm",
    "NonterminalTag",
    "PRODUCTIONS",
    "ParseError",
    "Parser",
    "ParsingError",
    "PositionedError",
    "SemanticError",
    "Spec",
    "SpecError",
    "Terminal",
    "TerminalTag",
    "Token",
    "TokenSource",
    "TokenStream",
    "__version__",
    "factorial",
    "parse",
    "tokenize",
)

from calcparse._version import __version__
from calcparse.ast import Nonterm, NonterminalTag, Terminal, TerminalTag, Token
from calcparse.automaton import Spec
from calcparse.errors import (
    AnyException,
    EmptyNumber,
    ExpectedOperand,
    ExpectedOperator,
    IllegalCharacter,
    IllegalFactorial,
    IncompleteCosine,
    LeadingZero,
    LexError,
    MalformedReduction,
    MissingInteger,
    ParseError,
    ParsingError,
    PositionedError,
    SemanticError,
    SpecError,
)
from calcparse.interfaces import Parser, TokenSource
from calcparse.lrparser import Lr, parse
from calcparse.productions import PRODUCTIONS, factorial
from calcparse.scanner import Lexer, TokenStream, tokenize
