# modules/periode/repository.py
"""
Une période n'a pas de gerant_id : le cloisonnement passe par
la jointure Periode → Barque.gerant_id.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from typing import Any, Dict, Iterable, List, Optional, Set

from app.shared.enums import PeriodeStatut
from app.shared.models import Barque, Periode


class PeriodeRepository:

    async def list(
        self,
        db: AsyncSession,
        gerant_id: int,
        barque_id: Optional[int] = None,
        annee: Optional[int] = None,
        mois: Optional[int] = None,
        statut: Optional[PeriodeStatut] = None,
    ) -> List[Periode]:
        query = (
            select(Periode)
            .join(Barque, Barque.id == Periode.barque_id)
            .where(Barque.gerant_id == gerant_id)
        )
        if barque_id is not None:
            query = query.where(Periode.barque_id == barque_id)
        if annee is not None:
            query = query.where(Periode.annee == annee)
        if mois is not None:
            query = query.where(Periode.mois == mois)
        if statut is not None:
            query = query.where(Periode.statut == statut)
        r = await db.execute(
            query.order_by(Periode.annee.desc(), Periode.mois.desc(), Periode.barque_id)
        )
        return list(r.scalars().all())

    async def get(self, db: AsyncSession, gerant_id: int, periode_id: int) -> Optional[Periode]:
        r = await db.execute(
            select(Periode)
            .join(Barque, Barque.id == Periode.barque_id)
            .where(Periode.id == periode_id, Barque.gerant_id == gerant_id)
        )
        return r.scalar_one_or_none()

    async def get_barques(
        self, db: AsyncSession, gerant_id: int, barque_ids: Iterable[int]
    ) -> List[Barque]:
        r = await db.execute(
            select(Barque).where(Barque.gerant_id == gerant_id, Barque.id.in_(list(barque_ids)))
        )
        return list(r.scalars().all())

    async def barques_with_periode(
        self, db: AsyncSession, barque_ids: Iterable[int], annee: int, mois: int
    ) -> Set[int]:
        r = await db.execute(
            select(Periode.barque_id).where(
                Periode.barque_id.in_(list(barque_ids)),
                Periode.annee == annee,
                Periode.mois == mois,
            )
        )
        return set(r.scalars().all())

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> Periode:
        periode = Periode(**data)
        db.add(periode)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        await db.refresh(periode)
        return periode

    async def create_many(self, db: AsyncSession, rows: List[Dict[str, Any]]) -> List[Periode]:
        periodes = [Periode(**row) for row in rows]
        db.add_all(periodes)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        for periode in periodes:
            await db.refresh(periode)
        return periodes

    async def update(self, db: AsyncSession, periode: Periode, data: Dict[str, Any]) -> Periode:
        for field, value in data.items():
            setattr(periode, field, value)
        await db.commit()
        await db.refresh(periode)
        return periode
