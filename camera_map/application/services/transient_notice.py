"""Auto-dismissing operator notices"""

import asyncio
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

NoticeListener = Callable[[Optional[str]], None]


class TransientNotice:
    """
    One notice slot that clears itself after a fixed duration.

    Showing a new message replaces the current one and restarts the timer.
    Listeners receive the message when shown and None when dismissed.
    Must be used from inside a running event loop.
    """

    def __init__(self, duration: float = 4.0) -> None:
        self.duration = duration
        self.message: Optional[str] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._listeners: List[NoticeListener] = []

    @property
    def visible(self) -> bool:
        return self.message is not None

    def subscribe(self, listener: NoticeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def show(self, message: str) -> None:
        self._cancel_timer()
        self.message = message
        self._timer = asyncio.get_running_loop().call_later(self.duration, self.dismiss)
        self._notify()

    def dismiss(self) -> None:
        self._cancel_timer()
        if self.message is None:
            return
        self.message = None
        self._notify()

    def close(self) -> None:
        """Cancel the pending timer without notifying (consumer teardown)"""
        self._cancel_timer()
        self._listeners.clear()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.message)
            except Exception as e:
                logger.error(f"Notice listener failed: {e}", exc_info=True)
