# modules/rapport/service.py
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Optional
from datetime import date

from app.core.errors import ValidationFailed
from app.engine.reporting.rapport import build_rapport, default_range
from app.modules.rapport.repository import RapportRepository
from app.shared.models import Gerant

repo = RapportRepository()


class RapportService:

    async def get_rapport(
        self,
        db: AsyncSession,
        gerant: Gerant,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
        barque_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> Dict:
        """Sans bornes : les 12 derniers mois."""
        today = today or date.today()
        debut, fin = default_range(today)
        debut = date_debut or debut
        fin = date_fin or fin
        if fin < debut:
            raise ValidationFailed(
                {"date_fin": "La date de fin doit être postérieure à la date de début"}
            )

        barques, periodes, paiements = await repo.load(db, gerant.id, debut, fin, barque_id)
        return build_rapport(barques, periodes, paiements, debut, fin, today=today)
