# modules/paiement/router.py
from fastapi import APIRouter, Query, status
from typing import List, Optional
from datetime import datetime

from app.shared.deps import DbDep, GerantDep
from app.modules.paiement.service import PaiementService
from app.modules.paiement.schemas import PaiementCreateIn, PaiementOut, PaiementSummaryOut

router = APIRouter(prefix="/api/gerants/{gerant_id}/paiements", tags=["Paiements"])
service = PaiementService()


@router.get("", response_model=List[PaiementOut], summary="Paiements du gérant")
async def list_paiements(
    gerant: GerantDep,
    db: DbDep,
    periode_id: Optional[int] = None,
    responsable_id: Optional[int] = None,
    date_debut: Optional[datetime] = None,
    date_fin: Optional[datetime] = None,
):
    return await service.list_paiements(
        db, gerant,
        periode_id=periode_id, responsable_id=responsable_id,
        date_debut=date_debut, date_fin=date_fin,
    )


@router.get("/summary", response_model=PaiementSummaryOut, summary="Total encaissé sur un mois")
async def paiement_summary(
    gerant: GerantDep,
    db: DbDep,
    annee: int = Query(..., ge=2000, le=2100),
    mois: int = Query(..., ge=1, le=12),
):
    return await service.summary(db, gerant, annee, mois)


@router.post(
    "",
    response_model=PaiementOut,
    status_code=status.HTTP_201_CREATED,
    summary="Enregistrer un paiement",
)
async def create_paiement(payload: PaiementCreateIn, gerant: GerantDep, db: DbDep):
    return await service.create_paiement(db, gerant, payload)
