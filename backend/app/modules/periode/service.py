# modules/periode/service.py
"""
Échéances mensuelles des barques.

generate() crée les périodes manquantes d'un mois pour une liste de
barques, au montant du tarif Mensuel actif au 1er du mois (0 sans tarif).
Une barque qui a déjà sa période pour ce mois est comptée dans skipped.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List, Optional
from datetime import date

from app.core.errors import AlreadyExistsError, NotFoundError
from app.modules.periode.repository import PeriodeRepository
from app.modules.tarif.service import TarifService
from app.shared.enums import PeriodeStatut
from app.shared.models import Gerant, Periode

logger = logging.getLogger(__name__)

repo          = PeriodeRepository()
tarif_service = TarifService()


def _duplicate(annee: int, mois: int) -> AlreadyExistsError:
    return AlreadyExistsError(
        f"Une période existe déjà pour cette barque en {mois:02d}/{annee}"
    )


class PeriodeService:

    async def list_periodes(
        self,
        db: AsyncSession,
        gerant: Gerant,
        barque_id: Optional[int] = None,
        annee: Optional[int] = None,
        mois: Optional[int] = None,
        statut: Optional[PeriodeStatut] = None,
    ) -> List[Periode]:
        return await repo.list(
            db, gerant.id, barque_id=barque_id, annee=annee, mois=mois, statut=statut
        )

    async def get_periode(self, db: AsyncSession, gerant: Gerant, periode_id: int) -> Periode:
        periode = await repo.get(db, gerant.id, periode_id)
        if not periode:
            raise NotFoundError("Période non trouvée")
        return periode

    async def create_periode(self, db: AsyncSession, gerant: Gerant, payload) -> Periode:
        data = payload.model_dump()
        if not await repo.get_barques(db, gerant.id, [data["barque_id"]]):
            raise NotFoundError("Barque non trouvée")
        if await repo.barques_with_periode(db, [data["barque_id"]], data["annee"], data["mois"]):
            raise _duplicate(data["annee"], data["mois"])
        try:
            return await repo.create(db, data)
        except IntegrityError:
            raise _duplicate(data["annee"], data["mois"])

    async def update_periode(
        self, db: AsyncSession, gerant: Gerant, periode_id: int, payload
    ) -> Periode:
        periode = await self.get_periode(db, gerant, periode_id)
        return await repo.update(db, periode, payload.model_dump(exclude_unset=True))

    async def generate(self, db: AsyncSession, gerant: Gerant, payload) -> Dict:
        barque_ids = list(dict.fromkeys(payload.barque_ids))
        barques = await repo.get_barques(db, gerant.id, barque_ids)
        unknown = set(barque_ids) - {b.id for b in barques}
        if unknown:
            raise NotFoundError(
                f"Barques non trouvées : {', '.join(str(i) for i in sorted(unknown))}"
            )

        existing = await repo.barques_with_periode(db, barque_ids, payload.annee, payload.mois)
        montant = await tarif_service.montant_mensuel(
            db, gerant.id, date(payload.annee, payload.mois, 1)
        )
        rows = [
            {
                "barque_id": barque_id,
                "annee": payload.annee,
                "mois": payload.mois,
                "montant": montant,
                "statut": PeriodeStatut.EN_ATTENTE,
            }
            for barque_id in barque_ids
            if barque_id not in existing
        ]
        try:
            created = await repo.create_many(db, rows) if rows else []
        except IntegrityError:
            # génération concurrente du même mois
            raise _duplicate(payload.annee, payload.mois)

        logger.info(
            "Périodes %02d/%d générées pour le gérant %s : %d créées, %d ignorées",
            payload.mois, payload.annee, gerant.id, len(created), len(existing),
        )
        return {"created": created, "skipped": len(existing)}
