# modules/responsable/service.py
"""
Responsables d'un gérant. Toutes les opérations sont cloisonnées par
gérant : un id appartenant à un autre gérant donne un 404.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AlreadyExistsError, NotFoundError
from app.modules.barque.repository import BarqueRepository
from app.modules.responsable.repository import ResponsableRepository
from app.shared.models import Barque, Gerant, Responsable

logger = logging.getLogger(__name__)

repo        = ResponsableRepository()
barque_repo = BarqueRepository()


class ResponsableService:

    async def list_responsables(
        self,
        db: AsyncSession,
        gerant: Gerant,
        actif: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> List[Responsable]:
        return await repo.list(db, gerant.id, actif=actif, search=search)

    async def get_responsable(
        self, db: AsyncSession, gerant: Gerant, responsable_id: int
    ) -> Responsable:
        responsable = await repo.get(db, gerant.id, responsable_id)
        if not responsable:
            raise NotFoundError("Responsable non trouvé")
        return responsable

    async def create_responsable(self, db: AsyncSession, gerant: Gerant, payload) -> Responsable:
        data = payload.model_dump()
        data["identifiant"] = data["identifiant"].strip()
        duplicate = AlreadyExistsError(
            f"L'identifiant {data['identifiant']} est déjà utilisé", field="identifiant"
        )
        if await repo.identifiant_exists(db, gerant.id, data["identifiant"]):
            raise duplicate
        try:
            responsable = await repo.create(db, gerant.id, data)
        except IntegrityError:
            raise duplicate
        logger.info("Responsable créé id=%s gérant=%s", responsable.id, gerant.id)
        return responsable

    async def update_responsable(
        self, db: AsyncSession, gerant: Gerant, responsable_id: int, payload
    ) -> Responsable:
        responsable = await self.get_responsable(db, gerant, responsable_id)
        return await repo.update(db, responsable, payload.model_dump(exclude_unset=True))

    async def assign_barque(
        self, db: AsyncSession, gerant: Gerant, responsable_id: int, barque_id: int
    ) -> Barque:
        """Confie une barque du gérant à l'un de ses responsables."""
        await self.get_responsable(db, gerant, responsable_id)
        barque = await repo.get_barque(db, gerant.id, barque_id)
        if not barque:
            raise NotFoundError("Barque non trouvée")
        await repo.assign_barque(db, barque, responsable_id)
        return await barque_repo.get_by_id(db, barque_id)
