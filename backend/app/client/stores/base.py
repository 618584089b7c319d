# app/client/stores/base.py
"""
Socle des stores côté client : un store détient l'état d'une entité
(liste, sélection, filtres, is_loading, error) et délègue les appels
réseau au client API reçu à la construction.

Contrat commun à toutes les actions :
    is_loading=True, error=None → appel API → résultat stocké
    en cas d'ApiError : error = message, is_loading=False
"""
from typing import Any, Awaitable, Optional

from app.client.api import ApiError, GestMarineAPI

DEFAULT_ERROR = "Une erreur est survenue"


def error_message(exc: Exception, default: str = DEFAULT_ERROR) -> str:
    return exc.message if isinstance(exc, ApiError) else default


class EntityStore:

    def __init__(self, api: GestMarineAPI):
        self.api = api
        self.is_loading = False
        self.error: Optional[str] = None

    async def _run(self, call: Awaitable[Any], reraise: bool = False) -> Any:
        self.is_loading = True
        self.error = None
        try:
            return await call
        except ApiError as exc:
            self.error = error_message(exc)
            if reraise:
                raise
            return None
        finally:
            self.is_loading = False

    def clear_error(self) -> None:
        self.error = None


class GerantScopedStore(EntityStore):
    """Store d'une ressource /api/gerants/{gerant_id}/... ."""

    def __init__(self, api: GestMarineAPI, gerant_id: int):
        super().__init__(api)
        self.gerant_id = gerant_id
        self.filters: dict = {}
