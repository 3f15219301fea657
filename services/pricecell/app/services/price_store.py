# app/services/price_store.py
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

# Il prezzo è un intero senza segno a 64 bit
PRICE_MAX = 2**64 - 1


class AsyncRWLock:
    """
    Lock lettori/scrittore per asyncio.

    - più lettori possono tenere il lock insieme;
    - lo scrittore aspetta (sospendendo il task) che lettori e altri
      scrittori abbiano rilasciato;
    - se c'è uno scrittore in attesa, i nuovi lettori aspettano lui,
      così un flusso continuo di GET non blocca mai una scrittura.

    Nessun timeout: le sezioni critiche sono solo assegnazioni in memoria.
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def locked_for_write(self) -> bool:
        return self._writer

    async def _wake_all(self) -> None:
        async with self._cond:
            self._cond.notify_all()

    async def _release(self) -> None:
        # i contatori sono già aggiornati: la notify non deve andare persa
        # neanche se il task che rilascia viene cancellato
        await asyncio.shield(self._wake_all())

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and self._waiting_writers == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            self._readers -= 1
            if self._readers == 0:
                await self._release()

    @asynccontextmanager
    async def writer(self) -> AsyncIterator[None]:
        async with self._cond:
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
            except BaseException:
                # scrittore cancellato in attesa: sblocca i lettori fermi per lui
                self._waiting_writers -= 1
                self._cond.notify_all()
                raise
            self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            self._writer = False
            await self._release()


class PriceStore:
    """
    Cella condivisa con il prezzo corrente (Optional[int]).

    Stati: assente (None) oppure presente (intero).
    Le letture prendono il lock in modalità condivisa, set/clear in
    modalità esclusiva. Nessuna validazione qui: il range viene
    controllato dal modello Pydantic della PATCH.
    """

    def __init__(self, initial: Optional[int] = None) -> None:
        self._price: Optional[int] = initial
        self._lock = AsyncRWLock()

    @property
    def lock(self) -> AsyncRWLock:
        return self._lock

    async def read(self) -> Optional[int]:
        async with self._lock.reader():
            return self._price

    async def set(self, price: int) -> None:
        async with self._lock.writer():
            self._price = price

    async def clear(self) -> None:
        async with self._lock.writer():
            self._price = None
