from datetime import datetime

from pydantic import BaseModel, Field

from backend.app.db.models.core_types import OrderState


class OrderLineRead(BaseModel):
    id: int
    medicament: int = Field(validation_alias="medication_id")
    quantite: int = Field(validation_alias="quantity")

    class Config:
        from_attributes = True


class OrderRead(BaseModel):
    numero: int = Field(validation_alias="number")
    dispensaire: str = Field(validation_alias="dispensary_code")
    adresseLivraison: str = Field(validation_alias="delivery_address")
    saisieLe: datetime = Field(validation_alias="created_at")
    envoyeeLe: datetime | None = Field(validation_alias="shipped_at")
    etat: OrderState = Field(validation_alias="state")
    lignes: list[OrderLineRead] = Field(validation_alias="lines")

    class Config:
        from_attributes = True
