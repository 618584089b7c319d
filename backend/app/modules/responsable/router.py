# modules/responsable/router.py
from fastapi import APIRouter, status
from typing import List, Optional

from app.shared.deps import DbDep, GerantDep
from app.modules.barque.schemas import BarqueOut
from app.modules.responsable.service import ResponsableService
from app.modules.responsable.schemas import (
    AssignBarqueIn,
    ResponsableCreateIn,
    ResponsableOut,
    ResponsableUpdateIn,
)

router = APIRouter(prefix="/api/gerants/{gerant_id}/responsables", tags=["Responsables"])
service = ResponsableService()


@router.get("", response_model=List[ResponsableOut], summary="Responsables du gérant")
async def list_responsables(
    gerant: GerantDep,
    db: DbDep,
    actif: Optional[bool] = None,
    search: Optional[str] = None,
):
    return await service.list_responsables(db, gerant, actif=actif, search=search)


@router.post(
    "",
    response_model=ResponsableOut,
    status_code=status.HTTP_201_CREATED,
    summary="Ajouter un responsable",
)
async def create_responsable(payload: ResponsableCreateIn, gerant: GerantDep, db: DbDep):
    return await service.create_responsable(db, gerant, payload)


@router.patch("/{responsable_id}", response_model=ResponsableOut, summary="Modifier un responsable")
async def update_responsable(
    responsable_id: int, payload: ResponsableUpdateIn, gerant: GerantDep, db: DbDep
):
    return await service.update_responsable(db, gerant, responsable_id, payload)


@router.post(
    "/{responsable_id}/barques",
    response_model=BarqueOut,
    summary="Confier une barque à un responsable",
)
async def assign_barque(
    responsable_id: int, payload: AssignBarqueIn, gerant: GerantDep, db: DbDep
):
    return await service.assign_barque(db, gerant, responsable_id, payload.barque_id)
