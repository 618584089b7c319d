# app/client/stores/gerant.py
from typing import Any, Dict, List, Optional, Set

from app.client.api import ApiError, GestMarineAPI
from app.client.stores.base import EntityStore, error_message


class GerantStore(EntityStore):

    def __init__(self, api: GestMarineAPI):
        super().__init__(api)
        self.gerants: List[Dict[str, Any]] = []
        self.total = 0
        self.filters: Dict[str, Any] = {}
        self.pending_deletes: Set[int] = set()

    async def fetch_gerants(self, **filters) -> None:
        if filters:
            self.filters = filters
        response = await self._run(self.api.get_gerants(**self.filters))
        if response is not None:
            self.gerants = [g for g in response["items"] if g["id"] not in self.pending_deletes]
            self.total = response["total"]

    async def create_gerant(self, data) -> Dict[str, Any]:
        gerant = await self._run(self.api.create_gerant(data), reraise=True)
        self.gerants.append(gerant)
        self.total += 1
        return gerant

    async def update_gerant(self, gerant_id: int, data) -> Dict[str, Any]:
        gerant = await self._run(self.api.update_gerant(gerant_id, data), reraise=True)
        self.gerants = [gerant if g["id"] == gerant_id else g for g in self.gerants]
        return gerant

    async def delete_gerant(self, gerant_id: int) -> None:
        """Retrait optimiste, restauré à sa place si le serveur refuse."""
        index = next((i for i, g in enumerate(self.gerants) if g["id"] == gerant_id), None)
        removed: Optional[Dict[str, Any]] = self.gerants.pop(index) if index is not None else None
        self.pending_deletes.add(gerant_id)
        if removed is not None:
            self.total -= 1

        try:
            await self.api.delete_gerant(gerant_id)
        except ApiError as exc:
            if removed is not None:
                self.gerants.insert(index, removed)
                self.total += 1
            self.error = error_message(exc)
            raise
        finally:
            self.pending_deletes.discard(gerant_id)

    async def check_cine_exists(self, cine: str) -> bool:
        try:
            return await self.api.check_cine_exists(cine)
        except ApiError as exc:
            self.error = error_message(exc)
            return False

    async def set_filters(self, **filters) -> None:
        await self.fetch_gerants(**filters)
