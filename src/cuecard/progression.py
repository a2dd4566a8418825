""" Dialog and tutorial progression.

The ProgressionController runs at most one dialog sequence or tutorial at a
time. Each line/step is advanced according to its completion mode:

 * on_next: an explicit try_advance, e.g. from the player pressing next
 * on_condition: a condition expression over ConditionState becoming true,
   checked every time the host calls tick
 * on_event: a key being raised on the EventBus

Hosts must call tick once per simulation tick while a run is active,
otherwise on_condition steps never advance on their own.

Gameplay code influences progression only through ConditionState
(set_flag/set_number) and EventBus (raise_event), e.g.

    controller.conditions.set_flag("TreeClicked", True)
    controller.event_bus.raise_event("FarmBuilt")

Finishing a tutorial is persisted through a PreferenceStore so later
start_tutorial calls just set the completion flag and return.
"""

import enum
import logging
import weakref
from typing import Optional, Sequence, Union

from cuecard import config, util, conditions as cond, events, prefs, view as dview
from cuecard.dialog import Line, Step, CompletionMode, OnNext, OnCondition, OnEvent, DialogSequence, TutorialSequence


class RunState(enum.Enum):
    IDLE = enum.auto()
    SEQUENCE = enum.auto()
    TUTORIAL = enum.auto()


class Counters(enum.IntEnum):
    def _generate_next_value_(name, start, count, last_values): # type: ignore
        """generate consecutive automatic numbers starting from zero"""
        return count
    SEQUENCES_STARTED = enum.auto()
    TUTORIALS_STARTED = enum.auto()
    TUTORIALS_SKIPPED = enum.auto()
    ADVANCES = enum.auto()
    CONDITION_ADVANCES = enum.auto()
    EVENT_ADVANCES = enum.auto()
    RUNS_COMPLETED = enum.auto()
    TUTORIALS_COMPLETED = enum.auto()
    CLOSES = enum.auto()


class ProgressionObserver:
    def input_lock_changed(self, locked:bool, controller:"ProgressionController") -> None:
        pass

    def run_started(self, state:RunState, controller:"ProgressionController") -> None:
        pass

    def run_complete(self, state:RunState, controller:"ProgressionController") -> None:
        pass

    def tutorial_complete(self, controller:"ProgressionController") -> None:
        pass


class ProgressionController:
    def __init__(
        self,
        conditions:Optional[cond.ConditionState]=None,
        event_bus:Optional[events.EventBus]=None,
        view:Optional[dview.AbstractDialogView]=None,
        preferences:Optional[prefs.PreferenceStore]=None,
        tutorial_completed_key:Optional[str]=None,
        tutorial_completed_flag:Optional[str]=None,
    ) -> None:
        self.logger = logging.getLogger(util.fullname(self))

        self._conditions = conditions if conditions is not None else cond.ConditionState()
        self._event_bus = event_bus if event_bus is not None else events.EventBus()
        self.view = view if view is not None else dview.AbstractDialogView()
        self.preferences = preferences if preferences is not None else prefs.MemoryPreferenceStore()
        self.tutorial_completed_key = tutorial_completed_key or config.Settings.progression.TUTORIAL_COMPLETED_KEY
        self.tutorial_completed_flag = tutorial_completed_flag or config.Settings.progression.TUTORIAL_COMPLETED_FLAG

        self._observers:weakref.WeakSet[ProgressionObserver] = weakref.WeakSet()
        self.counters = [0] * len(Counters)

        # the active run, at most one of these is set
        self._state = RunState.IDLE
        self._lines:Optional[list[Line]] = None
        self._steps:Optional[list[Optional[Step]]] = None
        self._index = 0

        # parameters of the active line/step
        self._mode:CompletionMode = OnNext()
        self._criteria:cond.Criteria = cond.FALSE
        self._subscribed_key:Optional[str] = None
        self._lock_input = False

        self._tutorial_completed = self.preferences.get(self.tutorial_completed_key, False)
        if self._tutorial_completed:
            self.logger.info(f'tutorial already completed per {self.tutorial_completed_key}')
            self._conditions.set_flag(self.tutorial_completed_flag, True)

    @property
    def conditions(self) -> cond.ConditionState:
        return self._conditions

    @property
    def event_bus(self) -> events.EventBus:
        return self._event_bus

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state != RunState.IDLE

    @property
    def index(self) -> int:
        return self._index

    @property
    def active_mode(self) -> CompletionMode:
        return self._mode

    @property
    def input_locked(self) -> bool:
        return self._lock_input

    @property
    def tutorial_completed(self) -> bool:
        return self._tutorial_completed

    def observe(self, observer:ProgressionObserver) -> None:
        self._observers.add(observer)

    def unobserve(self, observer:ProgressionObserver) -> None:
        self._observers.discard(observer)

    def start_sequence(self, sequence:Union[DialogSequence, Sequence[Line], None]) -> None:
        """ Starts a plain dialog sequence, replacing any active run. Every
        line advances on next. Empty sequences are ignored. """

        lines = sequence.lines if isinstance(sequence, DialogSequence) else sequence
        if not lines:
            self.logger.debug("ignoring empty dialog sequence")
            return

        self.logger.debug(f'starting sequence of {len(lines)} lines (replacing {self._state})')
        self._steps = None
        self._lines = list(lines)
        self._index = 0
        self._state = RunState.SEQUENCE
        self.counters[Counters.SEQUENCES_STARTED] += 1

        self._open()
        self._show_line(self._lines[self._index])
        self._set_active_mode(OnNext(), False)

        for observer in self._observers.copy():
            observer.run_started(self._state, self)

    def start_tutorial(self, tutorial:Union[TutorialSequence, Sequence[Step], None]) -> None:
        """ Starts a tutorial, replacing any active run.

        If a tutorial was already completed (this session or persisted from
        an earlier one) this only sets the completion flag. """

        if self._tutorial_completed:
            self.logger.debug("tutorial already completed, skipping")
            self.counters[Counters.TUTORIALS_SKIPPED] += 1
            self._conditions.set_flag(self.tutorial_completed_flag, True)
            return

        steps = tutorial.steps if isinstance(tutorial, TutorialSequence) else tutorial
        if not steps:
            self.logger.debug("ignoring empty tutorial")
            return

        self.logger.info(f'starting tutorial of {len(steps)} steps (replacing {self._state})')
        self._lines = None
        self._steps = list(steps)
        self._index = 0
        self._state = RunState.TUTORIAL
        self.counters[Counters.TUTORIALS_STARTED] += 1

        self._open()
        self._apply_step(self._steps[self._index])

        for observer in self._observers.copy():
            observer.run_started(self._state, self)

    def try_advance(self) -> bool:
        """ Advances the active run if its current gate allows.

        Safe to call at any time, e.g. on every advance press. Returns True if
        the run advanced (or finished). """

        if not self.is_open:
            return False

        if isinstance(self._mode, OnCondition) and not self._criteria.evaluate(self._conditions):
            return False

        self._advance()
        return True

    def tick(self) -> None:
        """ Polls the active condition, if any. Call once per tick. """

        if not self.is_open:
            return

        if isinstance(self._mode, OnCondition) and self._criteria.evaluate(self._conditions):
            self.logger.debug(f'condition "{self._mode.expression}" satisfied')
            self.counters[Counters.CONDITION_ADVANCES] += 1
            self.try_advance()

    def close(self) -> None:
        """ Ends any active run immediately. Safe to call when idle. """

        self.counters[Counters.CLOSES] += 1
        self._close()

    def _close(self) -> None:
        self._set_active_mode(OnNext(), False)
        self._lines = None
        self._steps = None
        self._index = 0
        self._state = RunState.IDLE
        self.view.set_visible(False)
        self._set_input_lock(False)

    def _advance(self) -> None:
        self.counters[Counters.ADVANCES] += 1

        if self._lines is not None:
            self._index += 1
            if self._index >= len(self._lines):
                self.logger.debug("sequence complete")
                self._finish(RunState.SEQUENCE)
                return

            self._show_line(self._lines[self._index])
            self._set_active_mode(OnNext(), False)
            return

        if self._steps is not None:
            self._index += 1
            if self._index >= len(self._steps):
                self._complete_tutorial()
                self._finish(RunState.TUTORIAL)
                return

            self._apply_step(self._steps[self._index])

    def _finish(self, state:RunState) -> None:
        self._close()
        self.counters[Counters.RUNS_COMPLETED] += 1
        for observer in self._observers.copy():
            observer.run_complete(state, self)

    def _complete_tutorial(self) -> None:
        self.logger.info(f'tutorial complete, saving {self.tutorial_completed_key}')
        self._tutorial_completed = True
        self._conditions.set_flag(self.tutorial_completed_flag, True)
        self.preferences.set(self.tutorial_completed_key, True)
        self.preferences.flush()
        self.counters[Counters.TUTORIALS_COMPLETED] += 1

        for observer in self._observers.copy():
            observer.tutorial_complete(self)

    def _apply_step(self, step:Optional[Step]) -> None:
        if step is None:
            self.logger.warning(f'missing tutorial step {self._index}, treating as on_next')
            self._set_active_mode(OnNext(), False)
            return

        self._show_line(step.line)
        self._set_active_mode(step.mode, step.lock_input)

    def _set_active_mode(self, mode:Optional[CompletionMode], lock_input:bool) -> None:
        # drop the previous subscription first so there's never more than one
        if self._subscribed_key is not None:
            self._event_bus.unsubscribe(self._subscribed_key, self._on_event_advance)
            self._subscribed_key = None

        if isinstance(mode, OnEvent):
            if not util.is_blank(mode.event_key):
                self._event_bus.subscribe(mode.event_key, self._on_event_advance)
                self._subscribed_key = mode.event_key
            self._criteria = cond.FALSE
        elif isinstance(mode, OnCondition):
            self._criteria = cond.parse_condition(mode.expression)
        elif isinstance(mode, OnNext):
            self._criteria = cond.FALSE
        else:
            self.logger.warning(f'unknown completion mode {mode}, treating as on_next')
            mode = OnNext()
            self._criteria = cond.FALSE

        self._mode = mode
        self._lock_input = lock_input
        self.logger.debug(f'active mode {mode.name} {mode} lock_input={lock_input}')

        self.view.set_advance_enabled(isinstance(mode, OnNext))
        self._set_input_lock(lock_input)

    def _on_event_advance(self) -> None:
        self.logger.debug(f'event "{self._subscribed_key}" fired')
        self.counters[Counters.EVENT_ADVANCES] += 1
        self.try_advance()

    def _show_line(self, line:Optional[Line]) -> None:
        self.view.set_visible(True)
        if line is not None:
            self.view.show_line(line)

    def _open(self) -> None:
        self.view.set_visible(True)

    def _set_input_lock(self, locked:bool) -> None:
        self._lock_input = locked
        for observer in self._observers.copy():
            observer.input_lock_changed(locked, self)
