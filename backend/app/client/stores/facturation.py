# app/client/stores/facturation.py
"""
Stores de facturation d'un gérant : tarifs, périodes, paiements, rapport.
Même contrat que les autres stores ; pas de mise à jour optimiste.
"""
from typing import Any, Dict, List, Optional

from app.client.stores.base import GerantScopedStore


def _replace(items: List[Dict[str, Any]], item: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [item if existing["id"] == item["id"] else existing for existing in items]


class TarifStore(GerantScopedStore):

    def __init__(self, api, gerant_id: int):
        super().__init__(api, gerant_id)
        self.tarifs: List[Dict[str, Any]] = []

    async def fetch_tarifs(self, **filters) -> None:
        tarifs = await self._run(self.api.get_tarifs(self.gerant_id, **{**self.filters, **filters}))
        if tarifs is not None:
            self.tarifs = tarifs

    async def create_tarif(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        tarif = await self._run(self.api.create_tarif(self.gerant_id, data))
        if tarif is not None:
            self.tarifs.append(tarif)
        return tarif

    async def update_tarif(self, tarif_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        tarif = await self._run(self.api.update_tarif(self.gerant_id, tarif_id, data))
        if tarif is not None:
            self.tarifs = _replace(self.tarifs, tarif)
        return tarif

    async def set_filters(self, **filters) -> None:
        self.filters = filters
        await self.fetch_tarifs()


class PeriodeStore(GerantScopedStore):

    def __init__(self, api, gerant_id: int):
        super().__init__(api, gerant_id)
        self.periodes: List[Dict[str, Any]] = []
        self.selected: Optional[Dict[str, Any]] = None

    async def fetch_periodes(self, **filters) -> None:
        periodes = await self._run(self.api.get_periodes(self.gerant_id, **{**self.filters, **filters}))
        if periodes is not None:
            self.periodes = periodes

    async def create_periode(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        periode = await self._run(self.api.create_periode(self.gerant_id, data))
        if periode is not None:
            self.periodes.append(periode)
        return periode

    async def update_periode(self, periode_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        periode = await self._run(self.api.update_periode(self.gerant_id, periode_id, data))
        if periode is not None:
            self.periodes = _replace(self.periodes, periode)
        return periode

    async def generate_periodes(self, barque_ids: List[int], annee: int, mois: int) -> Optional[Dict[str, Any]]:
        result = await self._run(self.api.generate_periodes(self.gerant_id, barque_ids, annee, mois))
        if result is not None:
            await self.fetch_periodes()
        return result

    def select_periode(self, periode: Optional[Dict[str, Any]]) -> None:
        self.selected = periode

    async def set_filters(self, **filters) -> None:
        self.filters = filters
        await self.fetch_periodes()


class PaiementStore(GerantScopedStore):

    def __init__(self, api, gerant_id: int):
        super().__init__(api, gerant_id)
        self.paiements: List[Dict[str, Any]] = []
        self.summary: Optional[Dict[str, Any]] = None

    async def fetch_paiements(self, **filters) -> None:
        paiements = await self._run(self.api.get_paiements(self.gerant_id, **{**self.filters, **filters}))
        if paiements is not None:
            self.paiements = paiements

    async def create_paiement(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        paiement = await self._run(self.api.create_paiement(self.gerant_id, data))
        if paiement is not None:
            self.paiements.append(paiement)
        return paiement

    async def fetch_summary(self, annee: int, mois: int) -> None:
        summary = await self._run(self.api.get_paiement_summary(self.gerant_id, annee, mois))
        if summary is not None:
            self.summary = summary

    async def set_filters(self, **filters) -> None:
        self.filters = filters
        await self.fetch_paiements()


class RapportStore(GerantScopedStore):

    def __init__(self, api, gerant_id: int):
        super().__init__(api, gerant_id)
        self.rapport: Optional[Dict[str, Any]] = None

    async def fetch_rapport(self, **filters) -> None:
        rapport = await self._run(self.api.get_rapport(self.gerant_id, **{**self.filters, **filters}))
        if rapport is not None:
            self.rapport = rapport

    async def set_filters(self, **filters) -> None:
        self.filters = filters
        await self.fetch_rapport()
