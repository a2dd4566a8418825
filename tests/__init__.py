from typing import Any, List, Tuple

from cuecard import dialog, view, progression

TEST_COMPLETED_KEY = "Test.Tutorial.Completed"

class MonitoringDialogView(view.AbstractDialogView):
    """ Records everything the controller asks the view to do. """

    def __init__(self) -> None:
        self.lines:List[dialog.Line] = []
        self.visible = False
        self.advance_enabled = False
        self.calls:List[Tuple[str, Any]] = []

    def show_line(self, line:dialog.Line) -> None:
        self.lines.append(line)
        self.calls.append(("show_line", line))

    def set_visible(self, visible:bool) -> None:
        self.visible = visible
        self.calls.append(("set_visible", visible))

    def set_advance_enabled(self, enabled:bool) -> None:
        self.advance_enabled = enabled
        self.calls.append(("set_advance_enabled", enabled))

    @property
    def current_line(self) -> dialog.Line:
        return self.lines[-1]

class MonitoringObserver(progression.ProgressionObserver):
    def __init__(self) -> None:
        self.input_locks:List[bool] = []
        self.started:List[progression.RunState] = []
        self.completed:List[progression.RunState] = []
        self.tutorials_completed = 0

    def input_lock_changed(self, locked:bool, controller:progression.ProgressionController) -> None:
        self.input_locks.append(locked)

    def run_started(self, state:progression.RunState, controller:progression.ProgressionController) -> None:
        self.started.append(state)

    def run_complete(self, state:progression.RunState, controller:progression.ProgressionController) -> None:
        self.completed.append(state)

    def tutorial_complete(self, controller:progression.ProgressionController) -> None:
        self.tutorials_completed += 1

def lines(*texts:str) -> List[dialog.Line]:
    return [dialog.Line("advisor", text) for text in texts]
