# modules/paiement/service.py
"""
Encaissements. Un paiement et le passage éventuel de sa période à "Paye"
sont commités ensemble.

Règles :
  - la période doit appartenir à une barque du gérant (sinon 404)
  - le responsable doit appartenir au gérant et être actif (sinon 422)
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List, Optional
from datetime import datetime
from decimal import Decimal

from app.core.errors import NotFoundError, ValidationFailed
from app.modules.paiement.repository import PaiementRepository
from app.modules.periode.repository import PeriodeRepository
from app.modules.responsable.repository import ResponsableRepository
from app.shared.enums import PeriodeStatut
from app.shared.models import Gerant, Paiement

logger = logging.getLogger(__name__)

repo             = PaiementRepository()
periode_repo     = PeriodeRepository()
responsable_repo = ResponsableRepository()


class PaiementService:

    async def list_paiements(
        self,
        db: AsyncSession,
        gerant: Gerant,
        periode_id: Optional[int] = None,
        responsable_id: Optional[int] = None,
        date_debut: Optional[datetime] = None,
        date_fin: Optional[datetime] = None,
    ) -> List[Paiement]:
        return await repo.list(
            db, gerant.id,
            periode_id=periode_id, responsable_id=responsable_id,
            date_debut=date_debut, date_fin=date_fin,
        )

    async def create_paiement(self, db: AsyncSession, gerant: Gerant, payload) -> Paiement:
        periode = await periode_repo.get(db, gerant.id, payload.periode_id)
        if not periode:
            raise NotFoundError("Période non trouvée")

        responsable = await responsable_repo.get(db, gerant.id, payload.responsable_id)
        if not responsable or not responsable.actif:
            raise ValidationFailed(
                {"responsable_id": "Le responsable doit être un responsable actif du gérant"}
            )

        data = payload.model_dump(exclude_none=True)
        paiement = await repo.add(db, data)

        total = await repo.total_for_periode(db, periode.id)
        if total >= Decimal(str(periode.montant)) and periode.statut != PeriodeStatut.PAYE:
            periode.statut = PeriodeStatut.PAYE
            logger.info("Période %s soldée (%s)", periode.id, total)

        await repo.commit(db)
        return await repo.refresh(db, paiement)

    async def summary(self, db: AsyncSession, gerant: Gerant, annee: int, mois: int) -> Dict:
        total, count = await repo.summary(db, gerant.id, annee, mois)
        return {
            "total_montant": float(total),
            "count": count,
            "periode": {"annee": annee, "mois": mois},
        }
