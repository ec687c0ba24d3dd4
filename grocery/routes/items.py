from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Body
from pydantic import BaseModel

from ..errors import StoreError
from ..logs import LogContext
from ..services.item_svc import (
    import_batch,
    list_items,
    list_categories,
    update_item_price,
    remove_item,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _audit_error(log: LogContext, err: Exception):
    # the original failure is what the caller sees, even if the audit row cannot be written
    try:
        log.write("ERROR", str(err))
    except StoreError:
        logger.warning("audit write failed for %s", log.action, exc_info=True)
        log.written = True


class ItemIn(BaseModel):
    name: str
    price: float


class ItemBatch(BaseModel):
    batch: dict[str, list[ItemIn]]


class PriceUpdate(BaseModel):
    name: str
    price: float


def _affected(affected: int) -> dict:
    return {"message": "ok" if affected else "not_found", "affected": affected}


@router.get("/api/items")
def api_items():
    try:
        return {"items": list_items()}
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/api/categories")
def api_categories():
    try:
        return {"items": list_categories()}
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/items/batch", status_code=201)
def api_items_batch(body: ItemBatch):
    batch = {cat: [(it.name, it.price) for it in items] for cat, items in body.batch.items()}
    with LogContext("ITEM_BATCH_IMPORT") as log:
        try:
            inserted = import_batch(batch, log)
        except ValueError as ve:
            _audit_error(log, ve)
            raise HTTPException(status_code=400, detail=str(ve))
        except StoreError as e:
            _audit_error(log, e)
            raise HTTPException(status_code=500, detail=str(e))
    return {"message": "ok", "inserted": inserted}


@router.post("/api/items/update-price")
def api_items_update_price(body: PriceUpdate):
    with LogContext("ITEM_UPDATE_PRICE") as log:
        try:
            affected = update_item_price(body.name, body.price, log)
        except StoreError as e:
            _audit_error(log, e)
            raise HTTPException(status_code=500, detail=str(e))
    return _affected(affected)


@router.post("/api/items/delete")
def api_items_delete(name: str = Body(..., embed=True)):
    with LogContext("ITEM_DELETE") as log:
        try:
            affected = remove_item(name, log)
        except StoreError as e:
            _audit_error(log, e)
            raise HTTPException(status_code=500, detail=str(e))
    return _affected(affected)
