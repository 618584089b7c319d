# modules/barque/repository.py
"""
Accès DB pour les barques et le gérant par défaut de l'import.

Règle : aucune règle métier ici (validation, dédoublonnage, messages).
Les IntegrityError remontent telles quelles ; le service les traduit.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func, or_
from sqlalchemy.orm import selectinload
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from app.shared.models import Barque, Gerant, Responsable

# Limite de paramètres SQLite (999 sur les vieilles versions)
IN_CLAUSE_BATCH = 500

DEFAULT_GERANT_FIELDS = {
    "nom": "Admin",
    "prenom": "System",
    "cine": "DEFAULT001",
    "telephone": "0000000000",
    "password": "defaultpassword",
}


class BarqueRepository:

    # ── Lecture ───────────────────────────────────────────────

    async def get_page(
        self, db: AsyncSession, page: int, limit: int, search: Optional[str] = None
    ) -> Tuple[int, List[Barque]]:
        where = []
        if search:
            where.append(or_(
                Barque.nom.contains(search),
                Barque.immatriculation.contains(search),
                Barque.port_attache.contains(search),
                Barque.affiliation.contains(search),
            ))

        total = (await db.execute(
            select(func.count(Barque.id)).where(*where)
        )).scalar_one()

        r = await db.execute(
            select(Barque)
            .options(selectinload(Barque.gerant))
            .where(*where)
            .order_by(Barque.updated_at.desc(), Barque.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return total, list(r.scalars().all())

    async def get_by_id(self, db: AsyncSession, barque_id: int) -> Optional[Barque]:
        r = await db.execute(
            select(Barque)
            .options(selectinload(Barque.gerant))
            .where(Barque.id == barque_id)
            .execution_options(populate_existing=True)
        )
        return r.scalar_one_or_none()

    async def get_by_immatriculation(
        self, db: AsyncSession, immatriculation: str
    ) -> Optional[Barque]:
        r = await db.execute(
            select(Barque).where(Barque.immatriculation == immatriculation)
        )
        return r.scalar_one_or_none()

    async def list_by_gerant(self, db: AsyncSession, gerant_id: int) -> List[Barque]:
        r = await db.execute(
            select(Barque)
            .options(selectinload(Barque.gerant))
            .where(Barque.gerant_id == gerant_id)
            .order_by(Barque.nom)
        )
        return list(r.scalars().all())

    async def existing_immatriculations(
        self, db: AsyncSession, immatriculations: Iterable[str]
    ) -> Set[str]:
        """Une requête IN par lot de 500 : immatriculations déjà en base."""
        values = list(dict.fromkeys(immatriculations))
        found: Set[str] = set()
        for start in range(0, len(values), IN_CLAUSE_BATCH):
            batch = values[start:start + IN_CLAUSE_BATCH]
            r = await db.execute(
                select(Barque.immatriculation).where(Barque.immatriculation.in_(batch))
            )
            found.update(r.scalars().all())
        return found

    async def gerant_exists(self, db: AsyncSession, gerant_id: int) -> bool:
        r = await db.execute(select(Gerant.id).where(Gerant.id == gerant_id))
        return r.scalar_one_or_none() is not None

    async def responsable_exists(self, db: AsyncSession, responsable_id: int) -> bool:
        r = await db.execute(select(Responsable.id).where(Responsable.id == responsable_id))
        return r.scalar_one_or_none() is not None

    # ── Écriture ──────────────────────────────────────────────

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> Barque:
        db_obj = Barque(**data)
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        return await self.get_by_id(db, db_obj.id)

    async def update(self, db: AsyncSession, barque: Barque, data: Dict[str, Any]) -> Barque:
        for field, value in data.items():
            setattr(barque, field, value)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        return await self.get_by_id(db, barque.id)

    async def delete(self, db: AsyncSession, barque: Barque) -> None:
        await db.delete(barque)
        await db.commit()

    # ── Import en masse ───────────────────────────────────────

    async def insert_in_savepoint(self, db: AsyncSession, data: Dict[str, Any]) -> Barque:
        """
        INSERT isolé dans un SAVEPOINT : un échec n'annule que cette ligne,
        la transaction du lot reste utilisable.
        """
        db_obj = Barque(**data)
        async with db.begin_nested():
            db.add(db_obj)
        return db_obj

    async def commit(self, db: AsyncSession) -> None:
        await db.commit()

    async def get_default_gerant(self, db: AsyncSession, email: str) -> Optional[Gerant]:
        r = await db.execute(select(Gerant).where(Gerant.email == email))
        return r.scalar_one_or_none()

    async def get_or_create_default_gerant(self, db: AsyncSession, email: str) -> Gerant:
        """Upsert idempotent sur l'email sentinelle."""
        gerant = await self.get_default_gerant(db, email)
        if gerant:
            return gerant

        gerant = Gerant(email=email, **DEFAULT_GERANT_FIELDS)
        db.add(gerant)
        try:
            await db.commit()
        except IntegrityError:
            # Import concurrent : l'autre requête l'a créé entre-temps
            await db.rollback()
            return await self.get_default_gerant(db, email)
        await db.refresh(gerant)
        return gerant
