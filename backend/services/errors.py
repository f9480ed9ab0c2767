"""
Erreurs métier levées par les services.

Traduites en réponses HTTP par les handlers de backend.app.main :
    NotFoundError     -> 404
    ConflictError     -> 409
    InvalidStateError -> 409
"""


class ServiceError(Exception):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ServiceError, LookupError):
    """Entité référencée introuvable."""


class ConflictError(ServiceError):
    """Règle d'unicité violée (ex: association déjà existante)."""


class InvalidStateError(ConflictError):
    """Opération interdite dans l'état courant (ex: commande déjà expédiée)."""
