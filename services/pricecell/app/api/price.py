# services/pricecell/app/api/price.py
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from app.services.price_store import PRICE_MAX, PriceStore

router = APIRouter()
logger = logging.getLogger("api.price")


# ------------ Pydantic ------------


class PriceUpdate(BaseModel):
    # strict: niente coercion da "100" / 1.5 / true
    price: int = Field(..., ge=0, le=PRICE_MAX, strict=True)


# ------------ Dependency store ------------


def get_price_store(request: Request) -> PriceStore:
    """
    Restituisce il PriceStore registrato da create_app() su app.state.
    """
    return request.app.state.price_store


# ------------ Endpoints ------------


@router.get("/price")
async def read_price(store: PriceStore = Depends(get_price_store)):
    """
    Prezzo corrente come testo decimale (200), oppure 404 con body vuoto
    se nessun prezzo è stato impostato.
    """
    price = await store.read()

    if price is None:
        logger.debug({"event": "price_read", "present": False})
        return Response(status_code=404)

    logger.debug({"event": "price_read", "present": True, "price": price})
    return PlainTextResponse(str(price))


@router.patch("/price")
async def update_price(
    payload: PriceUpdate,
    store: PriceStore = Depends(get_price_store),
):
    await store.set(payload.price)

    logger.info({"event": "price_set", "price": payload.price})
    return Response(status_code=200)


@router.delete("/price")
async def delete_price(store: PriceStore = Depends(get_price_store)):
    """
    Azzera il prezzo. Sempre 200, anche se era già assente.
    """
    await store.clear()

    logger.info({"event": "price_cleared"})
    return Response(status_code=200)
