""" Dialog content for cuecard: lines, steps, sequences and tutorials """

import abc
from dataclasses import dataclass
from typing import Sequence, Dict, Any, Optional, Callable

from cuecard import config, util


@dataclass(frozen=True)
class Line:
    speaker_id: str
    text: str
    portrait: Optional[str] = None


class CompletionMode(abc.ABC):
    """ How a step is allowed to advance. One of OnNext, OnCondition or
    OnEvent, each carrying only the parameters that variant needs. """

    @property
    def name(self) -> str:
        return util.camel_to_snake(self.__class__.__name__)


@dataclass(frozen=True)
class OnNext(CompletionMode):
    """ advance on an explicit next/advance press """
    pass


@dataclass(frozen=True)
class OnCondition(CompletionMode):
    """ advance as soon as the condition expression holds """
    expression: str


@dataclass(frozen=True)
class OnEvent(CompletionMode):
    """ advance when the event key is raised on the event bus """
    event_key: str


@dataclass(frozen=True)
class Step:
    line: Optional[Line]
    mode: CompletionMode = OnNext()
    lock_input: bool = False


class DialogSequence:
    def __init__(self, sequence_id:str, lines:Sequence[Line]) -> None:
        self.sequence_id = sequence_id
        self.lines = list(lines)


class TutorialSequence:
    def __init__(self, tutorial_id:str, steps:Sequence[Step]) -> None:
        self.tutorial_id = tutorial_id
        self.steps = list(steps)


def _require(data:Dict[str, Any], key:str, what:str) -> Any:
    if key not in data:
        raise ValueError(f'{what} missing required field "{key}"')
    return data[key]

MODE_LOADERS:Dict[str, Callable[[Dict[str, Any]], CompletionMode]] = {
    "on_next": lambda data: OnNext(),
    "on_condition": lambda data: OnCondition(_require(data, "condition", "on_condition step")),
    "on_event": lambda data: OnEvent(_require(data, "event", "on_event step")),
}

def load_line(line_data:Dict[str, Any]) -> Line:
    return Line(
        line_data.get("speaker", ""),
        _require(line_data, "text", "line"),
        line_data.get("portrait"),
    )


def load_step(step_data:Dict[str, Any]) -> Step:
    mode_name = step_data.get("mode", "on_next")
    if mode_name not in MODE_LOADERS:
        raise ValueError(f'unknown completion mode "{mode_name}", expected one of {list(MODE_LOADERS.keys())}')

    return Step(
        load_line(step_data),
        MODE_LOADERS[mode_name](step_data),
        bool(step_data.get("lock_input", False)),
    )


def load_sequence(sequence_id:str) -> DialogSequence:
    sequences = config.Dialogs.get("sequences", {})
    if sequence_id not in sequences:
        raise ValueError(f'no dialog sequence "{sequence_id}"')

    return DialogSequence(
        sequence_id,
        [load_line(x) for x in sequences[sequence_id].get("lines", [])],
    )


def load_tutorial(tutorial_id:str) -> TutorialSequence:
    tutorials = config.Dialogs.get("tutorials", {})
    if tutorial_id not in tutorials:
        raise ValueError(f'no tutorial "{tutorial_id}"')

    return TutorialSequence(
        tutorial_id,
        [load_step(x) for x in tutorials[tutorial_id].get("steps", [])],
    )
