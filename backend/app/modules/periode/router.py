# modules/periode/router.py
from fastapi import APIRouter, status
from typing import List, Optional

from app.shared.deps import DbDep, GerantDep
from app.shared.enums import PeriodeStatut
from app.modules.periode.service import PeriodeService
from app.modules.periode.schemas import (
    PeriodeCreateIn,
    PeriodeGenerateIn,
    PeriodeGenerateOut,
    PeriodeOut,
    PeriodeUpdateIn,
)

router = APIRouter(prefix="/api/gerants/{gerant_id}/periodes", tags=["Périodes"])
service = PeriodeService()


@router.get("", response_model=List[PeriodeOut], summary="Périodes des barques du gérant")
async def list_periodes(
    gerant: GerantDep,
    db: DbDep,
    barque_id: Optional[int] = None,
    annee: Optional[int] = None,
    mois: Optional[int] = None,
    statut: Optional[PeriodeStatut] = None,
):
    return await service.list_periodes(
        db, gerant, barque_id=barque_id, annee=annee, mois=mois, statut=statut
    )


@router.post(
    "",
    response_model=PeriodeOut,
    status_code=status.HTTP_201_CREATED,
    summary="Créer une période",
)
async def create_periode(payload: PeriodeCreateIn, gerant: GerantDep, db: DbDep):
    return await service.create_periode(db, gerant, payload)


@router.post(
    "/generate",
    response_model=PeriodeGenerateOut,
    status_code=status.HTTP_201_CREATED,
    summary="Générer les périodes d'un mois",
)
async def generate_periodes(payload: PeriodeGenerateIn, gerant: GerantDep, db: DbDep):
    return await service.generate(db, gerant, payload)


@router.patch("/{periode_id}", response_model=PeriodeOut, summary="Modifier une période")
async def update_periode(periode_id: int, payload: PeriodeUpdateIn, gerant: GerantDep, db: DbDep):
    return await service.update_periode(db, gerant, periode_id, payload)
