from decimal import Decimal

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    libelle: str = Field(min_length=1, max_length=255)
    description: str | None = None


class CategoryRead(BaseModel):
    code: int
    libelle: str = Field(validation_alias="label")
    description: str | None

    class Config:
        from_attributes = True


class MedicationCreate(BaseModel):
    nom: str = Field(min_length=1, max_length=255)
    categorie: int
    quantiteParUnite: str | None = Field(default=None, max_length=64)
    prixUnitaire: Decimal = Field(default=Decimal("0.00"), ge=0)
    unitesEnStock: int = Field(default=0, ge=0)
    unitesCommandees: int = Field(default=0, ge=0)
    niveauDeReappro: int = Field(default=0, ge=0)
    indisponible: bool = False


class MedicationRead(BaseModel):
    id: int
    nom: str = Field(validation_alias="name")
    categorie: int = Field(validation_alias="category_code")
    quantiteParUnite: str | None = Field(validation_alias="quantity_per_unit")
    prixUnitaire: float = Field(validation_alias="unit_price")
    unitesEnStock: int = Field(validation_alias="units_in_stock")
    unitesCommandees: int = Field(validation_alias="units_on_order")
    niveauDeReappro: int = Field(validation_alias="reorder_threshold")
    indisponible: bool = Field(validation_alias="unavailable")

    class Config:
        from_attributes = True


class DispensaryRead(BaseModel):
    code: str
    nom: str = Field(validation_alias="name")
    adresse: str = Field(validation_alias="address")
    ville: str | None = Field(validation_alias="city")
    codePostal: str | None = Field(validation_alias="postal_code")

    class Config:
        from_attributes = True
