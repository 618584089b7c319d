# modules/rapport/router.py
from fastapi import APIRouter
from typing import Optional
from datetime import date

from app.shared.deps import DbDep, GerantDep
from app.modules.rapport.service import RapportService
from app.modules.rapport.schemas import RapportOut

router = APIRouter(prefix="/api/gerants/{gerant_id}/rapports", tags=["Rapports"])
service = RapportService()


@router.get("", response_model=RapportOut, summary="Rapport de recouvrement")
async def get_rapport(
    gerant: GerantDep,
    db: DbDep,
    date_debut: Optional[date] = None,
    date_fin: Optional[date] = None,
    barque_id: Optional[int] = None,
):
    return await service.get_rapport(
        db, gerant, date_debut=date_debut, date_fin=date_fin, barque_id=barque_id
    )
