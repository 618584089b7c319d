# modules/rapport/repository.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional, Tuple
from datetime import date

from app.shared.models import Barque, Paiement, Periode


def _month_index(d: date) -> int:
    return d.year * 100 + d.month


class RapportRepository:

    async def load(
        self,
        db: AsyncSession,
        gerant_id: int,
        debut: date,
        fin: date,
        barque_id: Optional[int] = None,
    ) -> Tuple[List[Barque], List[Periode], List[Paiement]]:
        """Barques du gérant, leurs périodes sur [debut, fin] et les paiements associés."""
        barque_query = select(Barque).where(Barque.gerant_id == gerant_id)
        if barque_id is not None:
            barque_query = barque_query.where(Barque.id == barque_id)
        barques = list((await db.execute(barque_query.order_by(Barque.nom, Barque.id))).scalars().all())
        if not barques:
            return [], [], []

        month = Periode.annee * 100 + Periode.mois
        periodes = list((await db.execute(
            select(Periode).where(
                Periode.barque_id.in_([b.id for b in barques]),
                month >= _month_index(debut),
                month <= _month_index(fin),
            )
        )).scalars().all())
        if not periodes:
            return barques, [], []

        paiements = list((await db.execute(
            select(Paiement).where(Paiement.periode_id.in_([p.id for p in periodes]))
        )).scalars().all())
        return barques, periodes, paiements
