# modules/tarif/router.py
from fastapi import APIRouter, Query, status
from typing import List, Optional
from datetime import date

from app.shared.deps import DbDep, GerantDep
from app.shared.enums import TarifType
from app.modules.tarif.service import TarifService
from app.modules.tarif.schemas import TarifCreateIn, TarifOut, TarifUpdateIn

router = APIRouter(prefix="/api/gerants/{gerant_id}/tarifs", tags=["Tarifs"])
service = TarifService()


@router.get("", response_model=List[TarifOut], summary="Tarifs du gérant")
async def list_tarifs(
    gerant: GerantDep,
    db: DbDep,
    type: Optional[TarifType] = None,
    actif: Optional[bool] = None,
    on_date: Optional[date] = Query(None, alias="date", description="Tarifs valables à cette date"),
):
    return await service.list_tarifs(db, gerant, type=type, actif=actif, on_date=on_date)


@router.post(
    "",
    response_model=TarifOut,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un tarif",
)
async def create_tarif(payload: TarifCreateIn, gerant: GerantDep, db: DbDep):
    return await service.create_tarif(db, gerant, payload)


@router.patch("/{tarif_id}", response_model=TarifOut, summary="Modifier un tarif")
async def update_tarif(tarif_id: int, payload: TarifUpdateIn, gerant: GerantDep, db: DbDep):
    return await service.update_tarif(db, gerant, tarif_id, payload)
