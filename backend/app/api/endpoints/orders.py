from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.app.schemas.order import OrderLineRead, OrderRead
from backend.services import orders as order_service

router = APIRouter(prefix="/commandes")


@router.get("/en-cours", response_model=list[OrderRead])
def list_open_orders(dispensaire: str = Query(...), db: Session = Depends(get_db)):
    rows = order_service.list_open_orders_for_dispensary(db, dispensaire)
    return [OrderRead.model_validate(o) for o in rows]


@router.delete("/lignes/{line_id}", status_code=204)
def remove_line(line_id: int, db: Session = Depends(get_db)):
    order_service.remove_line(db, line_id)
    db.commit()
    return Response(status_code=204)


@router.get("/{numero}", response_model=OrderRead)
def get_order(numero: int, db: Session = Depends(get_db)):
    return OrderRead.model_validate(order_service.get_order(db, numero))


@router.post("", response_model=OrderRead, status_code=201)
def create_order(dispensaire: str = Query(...), db: Session = Depends(get_db)):
    order = order_service.create_order(db, dispensaire)
    db.commit()
    db.refresh(order)
    return OrderRead.model_validate(order)


@router.post("/{numero}/lignes", response_model=OrderLineRead, status_code=201)
def add_line(
    numero: int,
    medicament: int = Query(...),
    quantite: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    line = order_service.add_line(db, numero, medicament, quantite)
    db.commit()
    db.refresh(line)
    return OrderLineRead.model_validate(line)


@router.post("/{numero}/expedition", response_model=OrderRead)
def ship_order(numero: int, db: Session = Depends(get_db)):
    order = order_service.ship_order(db, numero)
    db.commit()
    return OrderRead.model_validate(order)
