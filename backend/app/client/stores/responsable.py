# app/client/stores/responsable.py
from typing import Any, Dict, List, Optional

from app.client.stores.base import GerantScopedStore


class ResponsableStore(GerantScopedStore):

    def __init__(self, api, gerant_id: int):
        super().__init__(api, gerant_id)
        self.responsables: List[Dict[str, Any]] = []
        self.selected: Optional[Dict[str, Any]] = None

    async def fetch_responsables(self, **filters) -> None:
        params = {**self.filters, **filters}
        responsables = await self._run(self.api.get_responsables(self.gerant_id, **params))
        if responsables is not None:
            self.responsables = responsables

    async def create_responsable(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        responsable = await self._run(self.api.create_responsable(self.gerant_id, data))
        if responsable is not None:
            self.responsables.append(responsable)
        return responsable

    async def update_responsable(self, responsable_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        responsable = await self._run(
            self.api.update_responsable(self.gerant_id, responsable_id, data)
        )
        if responsable is not None:
            self.responsables = [
                responsable if r["id"] == responsable_id else r for r in self.responsables
            ]
        return responsable

    async def assign_barque(self, responsable_id: int, barque_id: int) -> Optional[Dict[str, Any]]:
        return await self._run(self.api.assign_barque(self.gerant_id, responsable_id, barque_id))

    def select_responsable(self, responsable: Optional[Dict[str, Any]]) -> None:
        self.selected = responsable

    async def set_filters(self, **filters) -> None:
        self.filters = filters
        await self.fetch_responsables()
