""" Named multicast event bus.

Gameplay code raises string keyed events (e.g. "FarmBuilt") and interested
parties, chiefly the ProgressionController while an on_event step is active,
subscribe callbacks to those keys.

Dispatch is synchronous on the caller's tick, in subscription order. There is
no queueing and no threading.
"""

import logging
from typing import Callable, Dict, List, Optional

from cuecard import util

Handle = Callable[[], None]


class EventBus:
    def __init__(self) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        # handles in subscription order, compared with == so they need not be hashable
        self._subscriptions:Dict[str, List[Handle]] = {}

    def subscribe(self, key:str, handle:Optional[Handle]) -> None:
        """ Registers handle for key. Subscribing the same handle twice has
        no additional effect. """
        if util.is_blank(key) or handle is None:
            return

        handles = self._subscriptions.setdefault(key, [])
        if handle not in handles:
            handles.append(handle)
            self.logger.debug(f'subscribed {handle} to "{key}" ({len(handles)} handles)')

    def unsubscribe(self, key:str, handle:Optional[Handle]) -> None:
        """ Removes handle from key, leaving other handles untouched. Removing
        a handle that isn't subscribed is fine. """
        if util.is_blank(key) or handle is None:
            return

        handles = self._subscriptions.get(key)
        if handles is None or handle not in handles:
            return

        handles.remove(handle)
        self.logger.debug(f'unsubscribed {handle} from "{key}"')
        if len(handles) == 0:
            del self._subscriptions[key]

    def raise_event(self, key:str) -> int:
        """ Invokes every handle subscribed to key when the raise starts.

        Handles subscribed or unsubscribed by a handler during dispatch take
        effect on the next raise. Returns the number of handles invoked. """
        if util.is_blank(key):
            return 0

        handles = self._subscriptions.get(key)
        if not handles:
            self.logger.debug(f'raised "{key}" with no subscribers')
            return 0

        self.logger.debug(f'raising "{key}" to {len(handles)} handles')
        invoked = 0
        for handle in list(handles):
            handle()
            invoked += 1
        return invoked

    def subscriber_count(self, key:str) -> int:
        if util.is_blank(key):
            return 0
        return len(self._subscriptions.get(key, []))

    def is_subscribed(self, key:str, handle:Handle) -> bool:
        return handle in self._subscriptions.get(key, [])

    def clear(self) -> None:
        self._subscriptions.clear()
