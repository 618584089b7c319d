# app/client/stores/barque.py
"""
Store des barques avec mises à jour optimistes.

    update_barque : l'état local change AVANT la réponse serveur ;
                    succès → version serveur, échec → instantané restauré
    delete_barque : la ligne disparaît tout de suite ; échec → remise à
                    sa position d'origine
    fetch_barques : réapplique les mises à jour en cours et masque les
                    suppressions en cours

Course connue, non corrigée : deux mises à jour concurrentes de la même
barque ne se coordonnent pas. Si la plus ancienne échoue APRÈS le succès
de la plus récente, son instantané (périmé) est restauré.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ValidationError

from app.client.api import ApiError, GestMarineAPI
from app.client.stores.base import EntityStore, error_message
from app.modules.barque.schemas import BarqueUpdateIn

logger = logging.getLogger(__name__)

PAGE_LIMIT = 10


def _as_record_fields(data: Any) -> Dict[str, Any]:
    """Champs modifiés, nommés comme dans les barques reçues (camelCase)."""
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        update = BarqueUpdateIn.model_validate(dict(data))
    except ValidationError:
        # rejeté par api.update_barque : pas d'état optimiste
        return {}
    return update.model_dump(by_alias=True, exclude_unset=True, mode="json")


@dataclass
class Pagination:
    current_page: int = 1
    total_pages: int = 1
    total: int = 0
    limit: int = PAGE_LIMIT


def _default_filters() -> Dict[str, Any]:
    return {"search": "", "statut": None, "gerant_id": None}


class BarqueStore(EntityStore):

    def __init__(self, api: GestMarineAPI):
        super().__init__(api)
        self.barques: List[Dict[str, Any]] = []
        self.selected: Optional[Dict[str, Any]] = None
        self.filters: Dict[str, Any] = _default_filters()
        self.pagination = Pagination()
        self.optimistic_updates: Dict[int, Dict[str, Any]] = {}
        self.pending_deletes: Set[int] = set()

    def _index(self, barque_id: int) -> Optional[int]:
        for index, barque in enumerate(self.barques):
            if barque["id"] == barque_id:
                return index
        return None

    # ── Lecture ───────────────────────────────────────────────

    async def fetch_barques(self, page: int = 1) -> None:
        if self.is_loading:
            return

        self.is_loading = True
        self.error = None
        try:
            response = await self.api.get_barques(
                page, self.pagination.limit, self.filters.get("search") or None
            )
        except ApiError as exc:
            self.error = error_message(exc, "Une erreur est survenue lors du chargement des barques")
            return
        finally:
            self.is_loading = False

        self.barques = [
            self.optimistic_updates.get(barque["id"], barque)
            for barque in response["items"]
            if barque["id"] not in self.pending_deletes
        ]
        self.pagination = Pagination(
            current_page=response["currentPage"],
            total_pages=response["totalPages"],
            total=response["total"],
            limit=self.pagination.limit,
        )

    def select_barque(self, barque: Optional[Dict[str, Any]]) -> None:
        self.selected = barque

    async def set_filters(self, **filters) -> None:
        self.filters = {**self.filters, **filters}
        await self.fetch_barques(1)

    # ── Écriture ──────────────────────────────────────────────

    async def create_barque(self, data) -> Dict[str, Any]:
        self.is_loading = True
        self.error = None
        try:
            barque = await self.api.create_barque(data)
        except ApiError as exc:
            self.error = error_message(exc, "Une erreur est survenue lors de la création de la barque")
            raise
        finally:
            self.is_loading = False

        self.barques.insert(0, barque)
        self.pagination.total += 1
        return barque

    async def update_barque(self, barque_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        index = self._index(barque_id)
        if index is None:
            return None

        snapshot = dict(self.barques[index])
        optimistic = {**snapshot, **_as_record_fields(data)}
        self.optimistic_updates[barque_id] = optimistic
        self.barques[index] = optimistic

        try:
            updated = await self.api.update_barque(barque_id, data)
        except Exception as exc:
            self.optimistic_updates.pop(barque_id, None)
            index = self._index(barque_id)
            if index is not None:
                self.barques[index] = snapshot
            self.error = error_message(exc, "Une erreur est survenue lors de la mise à jour de la barque")
            logger.warning("Mise à jour de la barque %s annulée : %s", barque_id, exc)
            raise

        self.optimistic_updates.pop(barque_id, None)
        index = self._index(barque_id)
        if index is not None and updated:
            self.barques[index] = updated
        return updated

    async def delete_barque(self, barque_id: int) -> None:
        index = self._index(barque_id)
        if index is None:
            return

        removed = self.barques.pop(index)
        self.pending_deletes.add(barque_id)
        self.pagination.total -= 1

        try:
            await self.api.delete_barque(barque_id)
        except Exception as exc:
            self.pending_deletes.discard(barque_id)
            self.barques.insert(min(index, len(self.barques)), removed)
            self.pagination.total += 1
            self.error = error_message(exc, "Une erreur est survenue lors de la suppression de la barque")
            raise
        self.pending_deletes.discard(barque_id)

    # ── Import ────────────────────────────────────────────────

    async def bulk_import(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        self.is_loading = True
        self.error = None
        try:
            result = await self.api.bulk_import_barques(records)
        except ApiError as exc:
            self.error = error_message(exc, "Une erreur est survenue lors de l'import")
            raise
        finally:
            self.is_loading = False

        await self.fetch_barques(1)
        return result

    def cleanup(self) -> None:
        self.barques = []
        self.selected = None
        self.error = None
        self.is_loading = False
        self.optimistic_updates = {}
        self.pending_deletes = set()
