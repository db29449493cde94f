"""
The SLR(1) automaton for the expression grammar.  The twelve states are
fixed; they are not computed from the grammar at run time.  Operator
precedence and associativity are encoded in each state's choice between
shifting and reducing on a following operator:

    operator      precedence  associativity
    + -           1           left
    ^             2           right
    cos (prefix)  3
    ! (postfix)   4

A state that has just recognized an operand reduces on an equal or lower
precedence follower (shifting instead for a right associative one), and
shifts on a higher precedence follower.  Operand-expecting states have no
reduce or accept entries at all.
"""

from __future__ import annotations
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

import types

from calcparse import interfaces
from calcparse import productions
from calcparse.ast import NonterminalTag, TerminalTag
from calcparse.errors import ExpectedOperand, ExpectedOperator, SpecError
from calcparse.grammar import (
    AcceptAction,
    Action,
    ErrorAction,
    LookaheadTag,
    Production,
    ReduceAction,
    ShiftAction,
    eoi,
)


E = NonterminalTag.EXPRESSION

PLUS = TerminalTag.PLUS
MINUS = TerminalTag.MINUS
POWER = TerminalTag.POWER
COSINE = TerminalTag.COSINE
FACTORIAL = TerminalTag.FACTORIAL
NUMBER = TerminalTag.NUMBER

# State ids.
START = 0
EXPRESSION = 1
AFTER_COSINE = 2
AFTER_NUMBER = 3
AFTER_PLUS = 4
AFTER_MINUS = 5
AFTER_POWER = 6
AFTER_FACTORIAL = 7
COSINE_EXPRESSION = 8
PLUS_EXPRESSION = 9
MINUS_EXPRESSION = 10
POWER_EXPRESSION = 11

# (precedence, associativity) of every terminal that can close an operand.
# A number binds tighter than any operator.
PRECEDENCE: Mapping[TerminalTag, Tuple[int, str]] = {
    PLUS: (1, "left"),
    MINUS: (1, "left"),
    POWER: (2, "right"),
    COSINE: (3, "left"),
    FACTORIAL: (4, "left"),
    NUMBER: (5, "left"),
}

# Infix and postfix operators, with the state that shifting them leads to.
FOLLOWERS: Mapping[TerminalTag, int] = {
    PLUS: AFTER_PLUS,
    MINUS: AFTER_MINUS,
    POWER: AFTER_POWER,
    FACTORIAL: AFTER_FACTORIAL,
}

OPERAND_MESSAGE = "Expected operand (number or prefix operator) %s."
OPERATOR_MESSAGE = "Expected operator (infix or postfix) %s."


class State:
    """
    One row of the parsing table.  Lookahead tags without an explicit entry
    (including end of input) get the state's default action, which is
    always an ErrorAction.
    """

    def __init__(
        self,
        id: int,
        name: str,
        actions: Mapping[LookaheadTag, Action],
        default: ErrorAction,
        gotos: Optional[Mapping[NonterminalTag, int]] = None,
    ) -> None:
        self.id = id
        self.name = name
        self.actions = types.MappingProxyType(dict(actions))
        self.default = default
        self.gotos = types.MappingProxyType(dict(gotos or {}))

    def action(self, tag: LookaheadTag) -> Action:
        return self.actions.get(tag, self.default)

    def goto(self, tag: NonterminalTag) -> int:
        try:
            return self.gotos[tag]
        except KeyError:
            raise SpecError(
                "State %d (%s) has no goto on %r" % (self.id, self.name, tag)
            ) from None

    def __repr__(self) -> str:
        return "State(%d, %s)" % (self.id, self.name)


def shifts(closing: TerminalTag, follower: TerminalTag) -> bool:
    """Whether an operand closed by `closing` is claimed by `follower`."""
    prec, _ = PRECEDENCE[closing]
    followerPrec, followerAssoc = PRECEDENCE[follower]
    if followerPrec != prec:
        return followerPrec > prec
    return followerAssoc == "right"


def operand_state(id: int, name: str, context: str, goto: int) -> State:
    return State(
        id,
        name,
        {COSINE: ShiftAction(AFTER_COSINE), NUMBER: ShiftAction(AFTER_NUMBER)},
        ErrorAction(ExpectedOperand, OPERAND_MESSAGE % context),
        {E: goto},
    )


def reduce_state(
    id: int,
    name: str,
    context: str,
    closing: TerminalTag,
    production: Production,
    extra: Iterable[TerminalTag] = (),
) -> State:
    """A state whose top of stack completes `production`; `closing` is the
    terminal whose precedence governs the production.  The `extra` tags
    also reduce, so that their error is reported by the enclosing state."""
    reduce = ReduceAction(production)
    actions: Dict[LookaheadTag, Action] = {eoi: reduce}
    for tag in extra:
        actions[tag] = reduce
    for follower, target in FOLLOWERS.items():
        if shifts(closing, follower):
            actions[follower] = ShiftAction(target)
        else:
            actions[follower] = reduce
    return State(
        id,
        name,
        actions,
        ErrorAction(ExpectedOperator, OPERATOR_MESSAGE % context),
    )


def build_states() -> Tuple[State, ...]:
    accept: Dict[LookaheadTag, Action] = {
        follower: ShiftAction(target) for follower, target in FOLLOWERS.items()
    }
    accept[eoi] = AcceptAction()

    return (
        operand_state(START, "start", "at the start of the input", EXPRESSION),
        State(
            EXPRESSION,
            "E",
            accept,
            ErrorAction(
                ExpectedOperator, OPERATOR_MESSAGE % "after an expression"
            ),
        ),
        operand_state(
            AFTER_COSINE,
            "cos",
            "after a cosine operator",
            COSINE_EXPRESSION,
        ),
        reduce_state(
            AFTER_NUMBER,
            "number",
            "after a number",
            NUMBER,
            productions.NUMBER,
            extra=(COSINE,),
        ),
        operand_state(
            AFTER_PLUS, "E +", "after a plus operator", PLUS_EXPRESSION
        ),
        operand_state(
            AFTER_MINUS, "E -", "after a minus operator", MINUS_EXPRESSION
        ),
        operand_state(
            AFTER_POWER, "E ^", "after a power operator", POWER_EXPRESSION
        ),
        reduce_state(
            AFTER_FACTORIAL,
            "E !",
            "after a factorial operator",
            FACTORIAL,
            productions.FACTORIAL,
        ),
        reduce_state(
            COSINE_EXPRESSION,
            "cos E",
            "after a cosine expression",
            COSINE,
            productions.COSINE,
        ),
        reduce_state(
            PLUS_EXPRESSION,
            "E + E",
            "after a plus expression",
            PLUS,
            productions.PLUS,
        ),
        reduce_state(
            MINUS_EXPRESSION,
            "E - E",
            "after a minus expression",
            MINUS,
            productions.MINUS,
        ),
        reduce_state(
            POWER_EXPRESSION,
            "E ^ E",
            "after a power expression",
            POWER,
            productions.POWER,
        ),
    )


_defaultSpec: Spec | None = None


class Spec(interfaces.Spec):
    """
    The Spec class contains the read-only parsing table that the parser
    driver needs in order to parse input.  A Spec can be shared by any
    number of parser instances; Spec.default() returns the shared instance
    for the expression grammar, built on first use.
    """

    def __init__(
        self,
        states: Optional[Iterable[State]] = None,
        productionList: Sequence[Production] = productions.PRODUCTIONS,
    ) -> None:
        if states is None:
            states = build_states()
        self._states = tuple(states)
        self._productions = tuple(productionList)
        self._validate()

    @classmethod
    def default(cls) -> Spec:
        global _defaultSpec
        if _defaultSpec is None:
            _defaultSpec = cls()
        return _defaultSpec

    @property
    def states(self) -> Tuple[State, ...]:
        return self._states

    @property
    def productions(self) -> Tuple[Production, ...]:
        return self._productions

    @property
    def start_state(self) -> int:
        return START

    def action(self, state: int, tag: LookaheadTag) -> Action:
        return self._states[state].action(tag)

    def goto(self, state: int, tag: NonterminalTag) -> int:
        return self._states[state].goto(tag)

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        lines = []
        for state in self._states:
            lines.append("State %d (%s):" % (state.id, state.name))
            for tag, action in state.actions.items():
                lines.append("  %-10r %r" % (tag, action))
            lines.append("  %-10s %r" % ("<other>", state.default))
            for nonterm, target in state.gotos.items():
                label = "goto %s" % nonterm.value
                lines.append("  %-10s %d" % (label, target))
        return "\n".join(lines)

    def _validate(self) -> None:
        nStates = len(self._states)
        if nStates == 0:
            raise SpecError("Empty parsing table")
        accepting: set[int] = set()
        for i, state in enumerate(self._states):
            if state.id != i:
                raise SpecError(
                    "State %r is at index %d of the table" % (state, i)
                )
            if not isinstance(state.default, ErrorAction):
                raise SpecError(
                    "Default action of %r is not an error action" % state
                )
            for tag, action in state.actions.items():
                if isinstance(action, ShiftAction):
                    if not 0 <= action.nextState < nStates:
                        raise SpecError(
                            "%r shifts %r to missing state %d"
                            % (state, tag, action.nextState)
                        )
                elif isinstance(action, ReduceAction):
                    if action.production not in self._productions:
                        raise SpecError(
                            "%r reduces %r by unknown production %r"
                            % (state, tag, action.production)
                        )
                elif isinstance(action, AcceptAction):
                    if tag is not eoi:
                        raise SpecError(
                            "%r accepts on %r instead of end of input"
                            % (state, tag)
                        )
                    accepting.add(i)
            for nonterm, target in state.gotos.items():
                if not 0 <= target < nStates:
                    raise SpecError(
                        "%r goes to missing state %d on %r"
                        % (state, target, nonterm)
                    )
        startGoto = self._states[START].gotos.get(E)
        if startGoto is None:
            raise SpecError("The start state has no goto on %r" % E)
        if accepting != {startGoto}:
            raise SpecError(
                "Only state %d may accept, not %r"
                % (startGoto, sorted(accepting))
            )
