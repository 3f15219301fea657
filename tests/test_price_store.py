import asyncio

import pytest

from app.services.price_store import AsyncRWLock, PriceStore


async def _spin(n: int = 5) -> None:
    for _ in range(n):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_store_starts_absent():
    store = PriceStore()

    assert await store.read() is None


@pytest.mark.asyncio
async def test_store_set_and_clear():
    store = PriceStore(5)
    assert await store.read() == 5

    await store.set(100)
    assert await store.read() == 100

    await store.clear()
    assert await store.read() is None

    await store.clear()
    assert await store.read() is None


@pytest.mark.asyncio
async def test_readers_share_the_lock():
    lock = AsyncRWLock()

    async with lock.reader():
        # un secondo lettore entra senza aspettare il primo
        async with lock.reader():
            assert lock.readers == 2

    assert lock.readers == 0


@pytest.mark.asyncio
async def test_writer_waits_for_readers():
    lock = AsyncRWLock()
    entered = asyncio.Event()

    async def write():
        async with lock.writer():
            entered.set()

    async with lock.reader():
        task = asyncio.create_task(write())
        await _spin()
        assert not entered.is_set()

    await asyncio.wait_for(task, timeout=1)
    assert entered.is_set()
    assert not lock.locked_for_write


@pytest.mark.asyncio
async def test_writer_excludes_other_writers():
    lock = AsyncRWLock()
    order = []

    async def write(name):
        async with lock.writer():
            order.append(f"{name}-in")
            await _spin()
            order.append(f"{name}-out")

    await asyncio.gather(write("a"), write("b"))

    assert order == ["a-in", "a-out", "b-in", "b-out"]


@pytest.mark.asyncio
async def test_waiting_writer_goes_before_new_readers():
    lock = AsyncRWLock()
    order = []

    async def write():
        async with lock.writer():
            order.append("writer")

    async def read():
        async with lock.reader():
            order.append("reader")

    async with lock.reader():
        writer_task = asyncio.create_task(write())
        await _spin()
        reader_task = asyncio.create_task(read())
        await _spin()
        assert order == []

    await asyncio.wait_for(asyncio.gather(writer_task, reader_task), timeout=1)
    assert order == ["writer", "reader"]


@pytest.mark.asyncio
async def test_read_waits_for_active_writer():
    store = PriceStore(1)
    writer_in = asyncio.Event()
    writer_release = asyncio.Event()

    async def hold_writer():
        async with store.lock.writer():
            writer_in.set()
            await writer_release.wait()

    writer_task = asyncio.create_task(hold_writer())
    await asyncio.wait_for(writer_in.wait(), timeout=1)
    assert store.lock.locked_for_write

    # nessuno scrittore in coda: il lettore è fermo solo per quello attivo
    read_task = asyncio.create_task(store.read())
    await _spin()
    assert not read_task.done()
    assert store.lock.readers == 0

    writer_release.set()
    await asyncio.wait_for(writer_task, timeout=1)

    assert await asyncio.wait_for(read_task, timeout=1) == 1
    assert not store.lock.locked_for_write


@pytest.mark.asyncio
async def test_cancelled_writer_does_not_block_readers():
    lock = AsyncRWLock()

    async def write():
        async with lock.writer():
            pass

    async with lock.reader():
        writer_task = asyncio.create_task(write())
        await _spin()
        writer_task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await writer_task

        # nessuno scrittore in attesa: un nuovo lettore entra subito
        async def read():
            async with lock.reader():
                return True

        assert await asyncio.wait_for(read(), timeout=1)


@pytest.mark.asyncio
async def test_lock_released_when_critical_section_raises():
    lock = AsyncRWLock()

    with pytest.raises(RuntimeError):
        async with lock.writer():
            raise RuntimeError("boom")

    assert not lock.locked_for_write

    store = PriceStore()
    with pytest.raises(RuntimeError):
        async with store.lock.writer():
            raise RuntimeError("boom")

    assert not store.lock.locked_for_write
    await asyncio.wait_for(store.set(3), timeout=1)
    assert await store.read() == 3


@pytest.mark.asyncio
async def test_concurrent_writes_leave_one_of_the_values():
    store = PriceStore()

    await asyncio.gather(*(store.set(v) for v in range(50)), *(store.read() for _ in range(50)))

    assert await store.read() in set(range(50))
