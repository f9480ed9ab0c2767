from pydantic import BaseModel

from backend.app.db.models.models_v1 import Supplier


class SupplierRead(BaseModel):
    id: int
    nom: str
    email: str
    categorieLibelles: list[str]  # catégories aplaties en libellés

    @classmethod
    def from_entity(cls, supplier: Supplier) -> "SupplierRead":
        return cls(
            id=supplier.id,
            nom=supplier.name,
            email=supplier.email,
            categorieLibelles=[c.label for c in supplier.categories],
        )
