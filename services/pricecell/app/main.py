import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from app.api import price
from app.core.config import settings
from app.core.logging import setup_logging
from app.services.price_store import PriceStore

# inizializza logging JSON
setup_logging(settings.log_level)

logger = logging.getLogger("main")


def create_app(store: Optional[PriceStore] = None) -> FastAPI:
    """
    Costruisce l'app FastAPI con il suo PriceStore.

    Lo store è passato esplicitamente (niente globali): i test creano
    un'app per caso di test, eventualmente con un prezzo già caricato.
    """
    # istanza FastAPI
    app = FastAPI(title="PriceCell", version="0.1.0")
    app.state.price_store = store if store is not None else PriceStore()

    @app.on_event("startup")
    def on_startup():
        logger.info(
            {
                "event": "service_started",
                "environment": settings.environment,
                "host": settings.host,
                "port": settings.port,
            }
        )

    # registra i router
    app.include_router(price.router, tags=["price"])

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
