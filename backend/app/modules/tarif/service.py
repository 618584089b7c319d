# modules/tarif/service.py
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import date

from app.core.errors import NotFoundError, ValidationFailed
from app.modules.tarif.repository import TarifRepository
from app.shared.enums import TarifType
from app.shared.models import Gerant, Tarif

repo = TarifRepository()


class TarifService:

    async def list_tarifs(
        self,
        db: AsyncSession,
        gerant: Gerant,
        type: Optional[TarifType] = None,
        actif: Optional[bool] = None,
        on_date: Optional[date] = None,
    ) -> List[Tarif]:
        return await repo.list(db, gerant.id, type=type, actif=actif, on_date=on_date)

    async def get_tarif(self, db: AsyncSession, gerant: Gerant, tarif_id: int) -> Tarif:
        tarif = await repo.get(db, gerant.id, tarif_id)
        if not tarif:
            raise NotFoundError("Tarif non trouvé")
        return tarif

    async def create_tarif(self, db: AsyncSession, gerant: Gerant, payload) -> Tarif:
        return await repo.create(db, gerant.id, payload.model_dump())

    async def update_tarif(self, db: AsyncSession, gerant: Gerant, tarif_id: int, payload) -> Tarif:
        tarif = await self.get_tarif(db, gerant, tarif_id)
        data = payload.model_dump(exclude_unset=True)
        if data.get("date_fin") is not None and data["date_fin"] < tarif.date_debut:
            raise ValidationFailed(
                {"date_fin": "La date de fin doit être postérieure à la date de début"}
            )
        return await repo.update(db, tarif, data)

    async def montant_mensuel(self, db: AsyncSession, gerant_id: int, on_date: date) -> float:
        """Montant du tarif mensuel actif à on_date, 0 sans tarif."""
        tarif = await repo.find_active(db, gerant_id, TarifType.MENSUEL, on_date)
        return float(tarif.montant) if tarif else 0.0
