# modules/responsable/repository.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, or_
from typing import Any, Dict, List, Optional

from app.shared.models import Barque, Responsable


class ResponsableRepository:

    async def list(
        self,
        db: AsyncSession,
        gerant_id: int,
        actif: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> List[Responsable]:
        query = select(Responsable).where(Responsable.gerant_id == gerant_id)
        if actif is not None:
            query = query.where(Responsable.actif == actif)
        if search:
            query = query.where(or_(
                Responsable.nom.contains(search),
                Responsable.identifiant.contains(search),
            ))
        r = await db.execute(query.order_by(Responsable.nom, Responsable.id))
        return list(r.scalars().all())

    async def get(
        self, db: AsyncSession, gerant_id: int, responsable_id: int
    ) -> Optional[Responsable]:
        """Responsable du gérant uniquement : celui d'un autre gérant est invisible."""
        r = await db.execute(
            select(Responsable).where(
                Responsable.id == responsable_id,
                Responsable.gerant_id == gerant_id,
            )
        )
        return r.scalar_one_or_none()

    async def identifiant_exists(self, db: AsyncSession, gerant_id: int, identifiant: str) -> bool:
        r = await db.execute(
            select(Responsable.id).where(
                Responsable.gerant_id == gerant_id,
                Responsable.identifiant == identifiant,
            )
        )
        return r.scalar_one_or_none() is not None

    async def get_barque(self, db: AsyncSession, gerant_id: int, barque_id: int) -> Optional[Barque]:
        r = await db.execute(
            select(Barque).where(Barque.id == barque_id, Barque.gerant_id == gerant_id)
        )
        return r.scalar_one_or_none()

    async def create(self, db: AsyncSession, gerant_id: int, data: Dict[str, Any]) -> Responsable:
        responsable = Responsable(gerant_id=gerant_id, **data)
        db.add(responsable)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        await db.refresh(responsable)
        return responsable

    async def update(
        self, db: AsyncSession, responsable: Responsable, data: Dict[str, Any]
    ) -> Responsable:
        for field, value in data.items():
            setattr(responsable, field, value)
        await db.commit()
        await db.refresh(responsable)
        return responsable

    async def assign_barque(self, db: AsyncSession, barque: Barque, responsable_id: int) -> Barque:
        barque.responsable_id = responsable_id
        await db.commit()
        await db.refresh(barque)
        return barque
