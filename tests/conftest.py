import logging

import pytest

from cuecard import conditions, events, prefs, progression
from . import MonitoringDialogView, MonitoringObserver, TEST_COMPLETED_KEY

# some logging to turn on if we like
#logging.getLogger("cuecard.progression").level = logging.DEBUG
#logging.getLogger("cuecard.events").level = logging.DEBUG

@pytest.fixture
def condition_state() -> conditions.ConditionState:
    return conditions.ConditionState()

@pytest.fixture
def event_bus() -> events.EventBus:
    return events.EventBus()

@pytest.fixture
def preferences() -> prefs.MemoryPreferenceStore:
    return prefs.MemoryPreferenceStore()

@pytest.fixture
def dialog_view() -> MonitoringDialogView:
    return MonitoringDialogView()

@pytest.fixture
def observer() -> MonitoringObserver:
    return MonitoringObserver()

@pytest.fixture
def controller(condition_state:conditions.ConditionState, event_bus:events.EventBus, dialog_view:MonitoringDialogView, preferences:prefs.MemoryPreferenceStore, observer:MonitoringObserver) -> progression.ProgressionController:
    controller = progression.ProgressionController(
        condition_state,
        event_bus,
        dialog_view,
        preferences,
        tutorial_completed_key=TEST_COMPLETED_KEY,
    )
    controller.observe(observer)
    return controller
