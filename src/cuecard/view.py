""" Presentation of dialog lines.

The progression controller drives a view but never reads anything back from
it. Calls are fire-and-forget.
"""

import sys
import logging
from typing import Optional, TextIO

from cuecard import dialog, util


class AbstractDialogView:
    """ Presentation collaborator. Default implementation shows nothing. """

    def show_line(self, line:dialog.Line) -> None:
        pass

    def set_visible(self, visible:bool) -> None:
        pass

    def set_advance_enabled(self, enabled:bool) -> None:
        pass


class TextDialogView(AbstractDialogView):
    """ Writes lines as "speaker: text" to a text stream. """

    def __init__(self, f:Optional[TextIO]=None, max_width:int=0) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.f = f if f is not None else sys.stdout
        self.max_width = max_width
        self.visible = False
        self.advance_enabled = False

    def show_line(self, line:dialog.Line) -> None:
        if not self.visible:
            self.logger.debug(f'showing line while hidden: {line}')

        text = f'{line.speaker_id}: {line.text}' if line.speaker_id else line.text
        if self.max_width > 0:
            text = util.elipsis(text, self.max_width)
        print(text, file=self.f)

    def set_visible(self, visible:bool) -> None:
        self.visible = visible

    def set_advance_enabled(self, enabled:bool) -> None:
        self.advance_enabled = enabled
