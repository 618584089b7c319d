# modules/gerant/repository.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func, or_
from typing import Any, Dict, List, Optional, Tuple

from app.shared.models import Gerant, Paiement, Responsable


class GerantRepository:

    # ── Lecture ───────────────────────────────────────────────

    async def list(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        cine: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Tuple[int, List[Gerant]]:
        where = []
        if search:
            where.append(or_(
                Gerant.nom.contains(search),
                Gerant.prenom.contains(search),
                Gerant.cine.contains(search),
                Gerant.email.contains(search),
            ))
        if cine:
            where.append(Gerant.cine == cine)
        if email:
            where.append(Gerant.email == email)

        r = await db.execute(
            select(Gerant).where(*where).order_by(Gerant.nom, Gerant.prenom, Gerant.id)
        )
        items = list(r.scalars().all())
        return len(items), items

    async def get_by_id(self, db: AsyncSession, gerant_id: int) -> Optional[Gerant]:
        r = await db.execute(select(Gerant).where(Gerant.id == gerant_id))
        return r.scalar_one_or_none()

    async def cine_exists(
        self, db: AsyncSession, cine: str, exclude_id: Optional[int] = None
    ) -> bool:
        query = select(Gerant.id).where(Gerant.cine == cine)
        if exclude_id is not None:
            query = query.where(Gerant.id != exclude_id)
        r = await db.execute(query.limit(1))
        return r.scalar_one_or_none() is not None

    async def email_exists(
        self, db: AsyncSession, email: str, exclude_id: Optional[int] = None
    ) -> bool:
        query = select(Gerant.id).where(Gerant.email == email)
        if exclude_id is not None:
            query = query.where(Gerant.id != exclude_id)
        r = await db.execute(query.limit(1))
        return r.scalar_one_or_none() is not None

    async def count_paiements(self, db: AsyncSession, gerant_id: int) -> int:
        r = await db.execute(
            select(func.count(Paiement.id))
            .join(Responsable, Responsable.id == Paiement.responsable_id)
            .where(Responsable.gerant_id == gerant_id)
        )
        return r.scalar_one()

    # ── Écriture ──────────────────────────────────────────────

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> Gerant:
        gerant = Gerant(**data)
        db.add(gerant)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        await db.refresh(gerant)
        return gerant

    async def update(self, db: AsyncSession, gerant: Gerant, data: Dict[str, Any]) -> Gerant:
        for field, value in data.items():
            setattr(gerant, field, value)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        await db.refresh(gerant)
        return gerant

    async def delete(self, db: AsyncSession, gerant: Gerant) -> None:
        await db.delete(gerant)
        await db.commit()

    async def insert_in_savepoint(self, db: AsyncSession, data: Dict[str, Any]) -> Gerant:
        gerant = Gerant(**data)
        async with db.begin_nested():
            db.add(gerant)
        return gerant

    async def commit(self, db: AsyncSession) -> None:
        await db.commit()
