# modules/barque/router.py
"""
Endpoints barques : CRUD paginé + import en masse (JSON ou fichier Excel).

Règle : zéro logique métier ici. Tout passe par BarqueService.
Seules les routes d'import rattrapent les exceptions elles-mêmes : leur
contrat d'erreur ({success: false, ...}) diffère du reste de l'API.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, File, UploadFile, status
from fastapi.responses import JSONResponse, Response

from app.client.import_reader import ImportFileError, read_barques, to_creation_records
from app.core.config import settings
from app.shared.deps import DbDep
from app.modules.barque.service import BarqueService
from app.modules.barque.schemas import (
    BarqueCreateIn,
    BarqueOut,
    BarquePageOut,
    BarqueUpdateIn,
    ImportResultOut,
    InitDefaultGerantOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/barques", tags=["Barques"])
service = BarqueService()


def _import_failure(exc: Exception) -> JSONResponse:
    logger.exception("Échec de l'import en masse")
    message = "An error occurred during bulk import"
    if settings.DEBUG and str(exc):
        message = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": message,
            "details": repr(exc) if settings.DEBUG else None,
        },
    )


# ─────────────────────────────────────────────
# CRUD
# ─────────────────────────────────────────────

@router.get("", response_model=BarquePageOut, summary="Liste paginée des barques")
async def list_barques(
    db: DbDep,
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
):
    return await service.list_barques(db, page=page, limit=limit, search=search)


@router.get("/{barque_id}", response_model=BarqueOut, summary="Détail d'une barque")
async def get_barque(barque_id: int, db: DbDep):
    return await service.get_barque(db, barque_id)


@router.post(
    "",
    response_model=BarqueOut,
    status_code=status.HTTP_201_CREATED,
    summary="Créer une barque",
)
async def create_barque(payload: BarqueCreateIn, db: DbDep):
    return await service.create_barque(db, payload)


@router.put("/{barque_id}", response_model=BarqueOut, summary="Modifier une barque")
@router.patch("/{barque_id}", response_model=BarqueOut, summary="Modifier une barque")
async def update_barque(barque_id: int, payload: BarqueUpdateIn, db: DbDep):
    return await service.update_barque(db, barque_id, payload)


@router.delete(
    "/{barque_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Supprimer une barque",
)
async def delete_barque(barque_id: int, db: DbDep):
    await service.delete_barque(db, barque_id)


# ─────────────────────────────────────────────
# IMPORT
# ─────────────────────────────────────────────

@router.post(
    "/init-default-gerant",
    response_model=InitDefaultGerantOut,
    summary="Créer (si besoin) le gérant par défaut des imports",
)
async def init_default_gerant(db: DbDep):
    gerant = await service.init_default_gerant(db)
    return {"success": True, "gerant": gerant}


@router.post("/bulk", response_model=ImportResultOut, summary="Import JSON en masse")
async def bulk_import(db: DbDep, records: Any = Body(None)):
    """
    200 avec le résultat même si la validation échoue (success=false).
    400 si le corps n'est pas un tableau non vide.
    """
    if not isinstance(records, list):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid data format. Expected an array of barques."},
        )
    if not records:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Empty array provided."},
        )

    try:
        return await service.bulk_import(db, records)
    except Exception as exc:
        return _import_failure(exc)


@router.post("/import", response_model=ImportResultOut, summary="Import d'un fichier Excel")
async def import_file(db: DbDep, file: UploadFile = File(...)):
    content = await file.read()
    try:
        records = to_creation_records(read_barques(content))
    except ImportFileError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )

    try:
        return await service.bulk_import(db, records)
    except Exception as exc:
        return _import_failure(exc)
