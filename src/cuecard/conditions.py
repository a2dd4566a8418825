""" Condition state and condition expressions gating dialog progression.

ConditionState holds game facts: named boolean flags and named integer
counters. Gameplay code writes them, condition expressions read them.

A condition expression is either a single flag name:

    TreeClicked

or a single comparison of a counter against an integer literal:

    wood >= 10
    Gold != -3

Operators are searched for in the order >=, <=, ==, !=, >, < so two
character operators are never split. Anything malformed evaluates to False.
There is no nesting and no boolean composition.
"""

import abc
import re
import operator
import logging
from typing import Callable, Dict, Mapping, Optional

from cuecard import util

logger = logging.getLogger(__name__)

INT_RE = re.compile("[+-]?[0-9]+")

# priority order matters: ">=" must be found before ">"
OPERATORS:Mapping[str, Callable[[int, int], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    "<": operator.lt,
}


class ConditionState:
    """ Mutable store of named flags and counters.

    Blank names are ignored on write and read as the default value. Nothing
    here raises, call sites are loosely validated gameplay triggers. """

    def __init__(self) -> None:
        self._flags:Dict[str, bool] = {}
        self._numbers:Dict[str, int] = {}

    def set_flag(self, name:str, value:bool) -> None:
        if util.is_blank(name):
            return
        self._flags[name] = value

    def get_flag(self, name:str) -> bool:
        if util.is_blank(name):
            return False
        return bool(self._flags.get(name, False))

    def set_number(self, name:str, value:int) -> None:
        if util.is_blank(name):
            return
        self._numbers[name] = value

    def get_number(self, name:str) -> int:
        if util.is_blank(name):
            return 0
        return self._numbers.get(name, 0)

    def clear(self) -> None:
        self._flags.clear()
        self._numbers.clear()

    def evaluate(self, expression:Optional[str]) -> bool:
        return evaluate(self, expression)


class Criteria(abc.ABC):
    @abc.abstractmethod
    def evaluate(self, state:ConditionState) -> bool: ...


class Literal(Criteria):
    def __init__(self, value:bool) -> None:
        self.value = value

    def evaluate(self, state:ConditionState) -> bool:
        return self.value

    def __repr__(self) -> str:
        return f'Literal({self.value})'


class FlagCriteria(Criteria):
    def __init__(self, flag:str) -> None:
        self.flag = flag

    def evaluate(self, state:ConditionState) -> bool:
        return state.get_flag(self.flag)

    def __repr__(self) -> str:
        return f'FlagCriteria({self.flag!r})'


class CompareCriteria(Criteria):
    def __init__(self, left:str, op:str, right:int) -> None:
        self.left = left
        self.op = op
        self.right = right

    def evaluate(self, state:ConditionState) -> bool:
        return OPERATORS[self.op](state.get_number(self.left), self.right)

    def __repr__(self) -> str:
        return f'CompareCriteria({self.left!r} {self.op} {self.right})'


FALSE = Literal(False)

def parse_condition(expression:Optional[str]) -> Criteria:
    """ Parses a condition expression into a Criteria.

    Never raises: anything that can't be understood parses to a criteria
    that is always False. """

    if util.is_blank(expression):
        return FALSE
    assert isinstance(expression, str)

    data = expression.strip()
    for op in OPERATORS:
        idx = data.find(op)
        if idx < 0:
            continue

        left = data[:idx].strip()
        right = data[idx+len(op):].strip()
        if not left or not right:
            logger.debug(f'condition "{expression}" missing operand for {op}')
            return FALSE
        if not INT_RE.fullmatch(right):
            logger.debug(f'condition "{expression}" has non-integer right hand side "{right}"')
            return FALSE

        return CompareCriteria(left, op, int(right))

    return FlagCriteria(data)


def evaluate(state:ConditionState, expression:Optional[str]) -> bool:
    """ Evaluates a condition expression against the given state.

    Pure with respect to state, safe to call every tick. """
    return parse_condition(expression).evaluate(state)
