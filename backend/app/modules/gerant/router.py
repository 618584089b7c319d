# modules/gerant/router.py
"""
Endpoints gérants : CRUD, vérification CINE, barques d'un gérant, import.

Règle : zéro logique métier ici. Tout passe par GerantService.
"""
from fastapi import APIRouter, status
from fastapi.responses import Response
from typing import List, Optional

from app.shared.deps import DbDep
from app.modules.gerant.service import GerantService
from app.modules.gerant.schemas import (
    CineCheckOut,
    GerantBarquesOut,
    GerantCreateIn,
    GerantImportResultOut,
    GerantListOut,
    GerantOut,
    GerantUpdateIn,
)

router = APIRouter(prefix="/api/gerants", tags=["Gérants"])
service = GerantService()


@router.get("", response_model=GerantListOut, summary="Liste des gérants")
async def list_gerants(
    db: DbDep,
    search: Optional[str] = None,
    cine: Optional[str] = None,
    email: Optional[str] = None,
):
    return await service.list_gerants(db, search=search, cine=cine, email=email)


@router.get("/check-cine/{cine}", response_model=CineCheckOut, summary="CINE déjà utilisé ?")
async def check_cine(cine: str, db: DbDep):
    return {"exists": await service.check_cine(db, cine)}


@router.post(
    "",
    response_model=GerantOut,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un gérant",
)
async def create_gerant(payload: GerantCreateIn, db: DbDep):
    return await service.create_gerant(db, payload)


@router.post("/bulk", response_model=GerantImportResultOut, summary="Import de gérants")
async def bulk_import(payload: List[GerantUpdateIn], db: DbDep):
    return await service.bulk_import(db, payload)


@router.get("/{gerant_id}", response_model=GerantOut, summary="Détail d'un gérant")
async def get_gerant(gerant_id: int, db: DbDep):
    return await service.get_gerant(db, gerant_id)


@router.get("/{gerant_id}/barques", response_model=GerantBarquesOut, summary="Barques d'un gérant")
async def list_gerant_barques(gerant_id: int, db: DbDep):
    return {"items": await service.list_barques(db, gerant_id)}


@router.put("/{gerant_id}", response_model=GerantOut, summary="Modifier un gérant")
@router.patch("/{gerant_id}", response_model=GerantOut, summary="Modifier un gérant")
async def update_gerant(gerant_id: int, payload: GerantUpdateIn, db: DbDep):
    return await service.update_gerant(db, gerant_id, payload)


@router.delete(
    "/{gerant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Supprimer un gérant",
)
async def delete_gerant(gerant_id: int, db: DbDep):
    await service.delete_gerant(db, gerant_id)
