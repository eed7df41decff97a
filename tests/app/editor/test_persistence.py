import asyncio
from unittest.mock import AsyncMock

import pytest

from resume_builder.app.editor.notifications import NotificationLevel, Notifier
from resume_builder.app.editor.persistence import (
    SAVE_FAILURE_MESSAGE,
    SAVE_SUCCESS_MESSAGE,
    PersistenceBridge,
    SaveInProgressError,
)


@pytest.mark.asyncio
async def test_submit_success_notifies_once(save_mock):
    notifier = Notifier()
    bridge = PersistenceBridge(save=save_mock, notifier=notifier)

    result = await bridge.submit("# Resume")

    assert result.success is True
    assert result.saved_content == "# Resume"
    assert result.error is None
    assert bridge.is_saving is False
    save_mock.assert_awaited_once_with("# Resume")
    pending = notifier.pending
    assert len(pending) == 1
    assert pending[0].level is NotificationLevel.SUCCESS
    assert pending[0].message == SAVE_SUCCESS_MESSAGE


@pytest.mark.asyncio
async def test_submit_passes_content_unmodified(save_mock):
    bridge = PersistenceBridge(save=save_mock, notifier=Notifier())
    content = "  ## Odd spacing\n\n\n<div>raw</div>\n"

    await bridge.submit(content)

    save_mock.assert_awaited_once_with(content)


@pytest.mark.asyncio
async def test_submit_failure_reports_error():
    notifier = Notifier()
    save = AsyncMock(side_effect=RuntimeError("database unavailable"))
    bridge = PersistenceBridge(save=save, notifier=notifier)

    result = await bridge.submit("# Resume")

    assert result.success is False
    assert result.error == "database unavailable"
    assert bridge.is_saving is False
    pending = notifier.pending
    assert len(pending) == 1
    assert pending[0].level is NotificationLevel.ERROR
    assert pending[0].message == "database unavailable"


@pytest.mark.asyncio
async def test_submit_failure_without_message_uses_default():
    notifier = Notifier()
    bridge = PersistenceBridge(save=AsyncMock(side_effect=RuntimeError()), notifier=notifier)

    result = await bridge.submit("# Resume")

    assert result.success is False
    assert notifier.pending[0].message == SAVE_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_concurrent_submit_is_rejected():
    release = asyncio.Event()
    calls = []

    async def slow_save(content: str) -> str:
        calls.append(content)
        await release.wait()
        return content

    notifier = Notifier()
    bridge = PersistenceBridge(save=slow_save, notifier=notifier)

    first = asyncio.ensure_future(bridge.submit("one"))
    await asyncio.sleep(0)
    assert bridge.is_saving is True

    with pytest.raises(SaveInProgressError):
        await bridge.submit("two")

    release.set()
    result = await first

    assert result.success is True
    assert calls == ["one"]
    assert len(notifier.pending) == 1
    assert bridge.is_saving is False


@pytest.mark.asyncio
async def test_submit_can_retry_after_failure(save_mock):
    save_mock.side_effect = [RuntimeError("boom"), "# Resume"]
    bridge = PersistenceBridge(save=save_mock, notifier=Notifier())

    failed = await bridge.submit("# Resume")
    retried = await bridge.submit("# Resume")

    assert failed.success is False
    assert retried.success is True
    assert save_mock.await_count == 2
