"""UI execution context.

All map-surface and request-store mutations run on one asyncio loop, the
"UI context". :class:`UiContext` is the single boundary that moves a call
from any thread onto that loop.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Any

from reliefmap.exceptions import UiThreadError

_logger = logging.getLogger(__name__)


class UiContext:
    """Binds the UI context to an asyncio loop and the thread running it."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._thread_id: int | None = None

    @classmethod
    def current(cls) -> UiContext:
        """Context for the running loop; must be called from inside it."""
        ctx = cls(asyncio.get_running_loop())
        ctx._thread_id = threading.get_ident()
        return ctx

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def is_ui_thread(self) -> bool:
        if self._thread_id is not None:
            return threading.get_ident() == self._thread_id
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def ensure_ui_thread(self) -> None:
        if not self.is_ui_thread():
            raise UiThreadError("map state must only be mutated on the UI context")

    def call(self, fn: Callable[..., Any], *args: Any) -> None:
        """Run ``fn(*args)`` on the UI context.

        Runs inline when already there, otherwise schedules it with
        ``call_soon_threadsafe``. Safe from any thread.
        """
        if self.is_ui_thread():
            fn(*args)
            return
        if self._loop.is_closed():
            _logger.debug("UI loop closed; dropping %r", fn)
            return
        self._loop.call_soon_threadsafe(fn, *args)
