# modules/paiement/repository.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
from decimal import Decimal

from app.shared.models import Barque, Paiement, Periode


def _scoped(gerant_id: int):
    return (
        select(Paiement)
        .join(Periode, Periode.id == Paiement.periode_id)
        .join(Barque, Barque.id == Periode.barque_id)
        .where(Barque.gerant_id == gerant_id)
    )


class PaiementRepository:

    async def list(
        self,
        db: AsyncSession,
        gerant_id: int,
        periode_id: Optional[int] = None,
        responsable_id: Optional[int] = None,
        date_debut: Optional[datetime] = None,
        date_fin: Optional[datetime] = None,
    ) -> List[Paiement]:
        query = _scoped(gerant_id)
        if periode_id is not None:
            query = query.where(Paiement.periode_id == periode_id)
        if responsable_id is not None:
            query = query.where(Paiement.responsable_id == responsable_id)
        if date_debut is not None:
            query = query.where(Paiement.date_paiement >= date_debut)
        if date_fin is not None:
            query = query.where(Paiement.date_paiement <= date_fin)
        r = await db.execute(query.order_by(Paiement.date_paiement.desc(), Paiement.id.desc()))
        return list(r.scalars().all())

    async def total_for_periode(self, db: AsyncSession, periode_id: int) -> Decimal:
        r = await db.execute(
            select(func.coalesce(func.sum(Paiement.montant), 0))
            .where(Paiement.periode_id == periode_id)
        )
        return Decimal(str(r.scalar_one()))

    async def summary(
        self, db: AsyncSession, gerant_id: int, annee: int, mois: int
    ) -> Tuple[Decimal, int]:
        """(somme, nombre) des paiements rattachés aux périodes annee/mois."""
        r = await db.execute(
            select(func.coalesce(func.sum(Paiement.montant), 0), func.count(Paiement.id))
            .join(Periode, Periode.id == Paiement.periode_id)
            .join(Barque, Barque.id == Periode.barque_id)
            .where(Barque.gerant_id == gerant_id, Periode.annee == annee, Periode.mois == mois)
        )
        total, count = r.one()
        return Decimal(str(total)), count

    async def add(self, db: AsyncSession, data: Dict[str, Any]) -> Paiement:
        paiement = Paiement(**data)
        db.add(paiement)
        await db.flush()
        return paiement

    async def commit(self, db: AsyncSession) -> None:
        await db.commit()

    async def refresh(self, db: AsyncSession, paiement: Paiement) -> Paiement:
        await db.refresh(paiement)
        return paiement
