# modules/tarif/repository.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import Any, Dict, List, Optional
from datetime import date

from app.shared.enums import TarifType
from app.shared.models import Tarif


def _valid_on(on_date: date):
    return (
        Tarif.date_debut <= on_date,
        or_(Tarif.date_fin.is_(None), Tarif.date_fin >= on_date),
    )


class TarifRepository:

    async def list(
        self,
        db: AsyncSession,
        gerant_id: int,
        type: Optional[TarifType] = None,
        actif: Optional[bool] = None,
        on_date: Optional[date] = None,
    ) -> List[Tarif]:
        query = select(Tarif).where(Tarif.gerant_id == gerant_id)
        if type is not None:
            query = query.where(Tarif.type == type)
        if actif is not None:
            query = query.where(Tarif.actif == actif)
        if on_date is not None:
            query = query.where(*_valid_on(on_date))
        r = await db.execute(query.order_by(Tarif.date_debut.desc(), Tarif.id.desc()))
        return list(r.scalars().all())

    async def get(self, db: AsyncSession, gerant_id: int, tarif_id: int) -> Optional[Tarif]:
        r = await db.execute(
            select(Tarif).where(Tarif.id == tarif_id, Tarif.gerant_id == gerant_id)
        )
        return r.scalar_one_or_none()

    async def find_active(
        self, db: AsyncSession, gerant_id: int, type: TarifType, on_date: date
    ) -> Optional[Tarif]:
        """Tarif actif le plus récent valable à on_date."""
        r = await db.execute(
            select(Tarif)
            .where(
                Tarif.gerant_id == gerant_id,
                Tarif.type == type,
                Tarif.actif.is_(True),
                *_valid_on(on_date),
            )
            .order_by(Tarif.date_debut.desc(), Tarif.id.desc())
            .limit(1)
        )
        return r.scalar_one_or_none()

    async def create(self, db: AsyncSession, gerant_id: int, data: Dict[str, Any]) -> Tarif:
        tarif = Tarif(gerant_id=gerant_id, **data)
        db.add(tarif)
        await db.commit()
        await db.refresh(tarif)
        return tarif

    async def update(self, db: AsyncSession, tarif: Tarif, data: Dict[str, Any]) -> Tarif:
        for field, value in data.items():
            setattr(tarif, field, value)
        await db.commit()
        await db.refresh(tarif)
        return tarif
