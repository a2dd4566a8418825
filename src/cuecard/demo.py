""" Kicks off the configured intro sequence and tutorial. """

import logging
from typing import Optional

from cuecard import config, dialog, util
from cuecard.progression import ProgressionController


class DemoStarter:
    def __init__(
        self,
        controller:ProgressionController,
        sequence:Optional[dialog.DialogSequence]=None,
        tutorial:Optional[dialog.TutorialSequence]=None,
        start_on_play:bool=True,
    ) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.controller = controller
        self.sequence = sequence
        self.tutorial = tutorial
        self.start_on_play = start_on_play

    @classmethod
    def from_config(cls, controller:ProgressionController) -> "DemoStarter":
        """ Builds a starter from Settings.demo, loading content by id. """
        demo_settings = config.Settings.demo
        sequence = dialog.load_sequence(demo_settings.SEQUENCE_ID) if demo_settings.SEQUENCE_ID else None
        tutorial = dialog.load_tutorial(demo_settings.TUTORIAL_ID) if demo_settings.TUTORIAL_ID else None
        return cls(controller, sequence, tutorial, start_on_play=demo_settings.START_ON_PLAY)

    def play(self) -> None:
        """ Called when the game starts. """
        if self.start_on_play:
            self.start()

    def start(self) -> None:
        if self.sequence is not None:
            self.logger.debug(f'starting demo sequence {self.sequence.sequence_id}')
            self.controller.start_sequence(self.sequence)

        # a tutorial replaces the sequence started above, like any other run
        if self.tutorial is not None and len(self.tutorial.steps) > 0:
            if not self.controller.tutorial_completed:
                self.logger.debug(f'starting demo tutorial {self.tutorial.tutorial_id}')
                self.controller.start_tutorial(self.tutorial)
