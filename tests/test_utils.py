import asyncio

import pytest

from xcomfort import deferred, utils


async def answer(value):
    await asyncio.sleep(0)
    return value


async def explode(message):
    await asyncio.sleep(0)
    raise RuntimeError(message)


@pytest.mark.asyncio
async def test_deferred_without_callback_is_awaitable():
    assert await deferred(answer(42)) == 42


@pytest.mark.asyncio
async def test_deferred_reports_success_to_callback():
    calls = []
    task = deferred(answer("x"), lambda err, res: calls.append((err, res)))
    await task
    await asyncio.sleep(0)
    assert calls == [(None, "x")]


@pytest.mark.asyncio
async def test_deferred_reports_failure_to_callback():
    calls = []
    task = deferred(explode("bad"), lambda err, res: calls.append((err, res)))
    with pytest.raises(RuntimeError):
        await task
    await asyncio.sleep(0)
    assert len(calls) == 1
    assert str(calls[0][0]) == "bad"
    assert calls[0][1] is None


@pytest.mark.asyncio
async def test_deferred_runs_async_callback():
    fut = asyncio.get_running_loop().create_future()

    async def callback(err, res):
        fut.set_result(res)

    deferred(answer("async"), callback)
    assert await fut == "async"


@pytest.mark.asyncio
async def test_deferred_reports_cancellation():
    fut = asyncio.get_running_loop().create_future()
    task = deferred(asyncio.sleep(10), lambda err, res: fut.set_result(err))
    task.cancel()
    assert isinstance(await fut, asyncio.CancelledError)


@pytest.mark.asyncio
async def test_deferred_logs_raising_callback(caplog):
    def callback(err, res):
        raise RuntimeError("callback blew up")

    assert await deferred(answer(1), callback) == 1
    await asyncio.sleep(0)

    assert "callback blew up" in caplog.text


@pytest.mark.asyncio
async def test_deferred_keeps_and_logs_failing_async_callback(caplog):
    async def callback(err, res):
        await asyncio.sleep(0)
        raise RuntimeError("async callback blew up")

    await deferred(answer(1), callback)
    running = [t for t in utils._callback_tasks if not t.done()]
    assert len(running) == 1
    await asyncio.gather(*running, return_exceptions=True)
    await asyncio.sleep(0)

    assert running[0] not in utils._callback_tasks
    assert "async callback blew up" in caplog.text
