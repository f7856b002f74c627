from __future__ import annotations

import asyncio
import threading

import pytest

from reliefmap.exceptions import UiThreadError
from reliefmap.ui import UiContext


@pytest.mark.asyncio
async def test_call_runs_inline_on_ui_thread() -> None:
    ui = UiContext.current()
    calls: list[int] = []

    ui.call(calls.append, 1)

    assert calls == [1]


@pytest.mark.asyncio
async def test_call_from_background_thread_is_redispatched() -> None:
    ui = UiContext.current()
    seen: list[int] = []
    done = asyncio.Event()

    def record() -> None:
        seen.append(threading.get_ident())
        done.set()

    worker = threading.Thread(target=ui.call, args=(record,))
    worker.start()
    worker.join()
    await asyncio.wait_for(done.wait(), timeout=1.0)

    assert seen == [threading.get_ident()]


@pytest.mark.asyncio
async def test_ensure_ui_thread_rejects_other_threads() -> None:
    ui = UiContext.current()
    errors: list[Exception] = []

    def check() -> None:
        try:
            ui.ensure_ui_thread()
        except UiThreadError as exc:
            errors.append(exc)

    worker = threading.Thread(target=check)
    worker.start()
    worker.join()

    ui.ensure_ui_thread()
    assert len(errors) == 1
