# tests/modules/barque/test_router.py
"""
Tests HTTP pour modules.barque.router

Couverture :
    GET    /api/barques                      → 200 page camelCase
    GET    /api/barques/{id}                 → 200 / 404
    POST   /api/barques                      → 201 / 409 / 422
    PUT    /api/barques/{id}, PATCH          → 200
    DELETE /api/barques/{id}                 → 204
    POST   /api/barques/init-default-gerant  → 200
    POST   /api/barques/bulk                 → 200 / 400 (format, vide) / 500
    POST   /api/barques/import               → 200 / 400 (fichier rejeté)
    Erreur non gérée                         → 500 {error}
"""
import pytest
from unittest.mock import AsyncMock

from app.core.config import settings
from app.core.errors import AlreadyExistsError, NotFoundError, ValidationFailed
from tests.conftest import make_barque, make_gerant, make_xlsx

pytestmark = pytest.mark.router

SERVICE = "app.modules.barque.router.service"

VALID_BODY = {
    "nom": "Ma Barque",
    "immatriculation": "12/3-4567",
    "portAttache": "12/3",
    "affiliation": "Pêche Côtière",
}

IMPORT_RESULT = {
    "success": True,
    "total": 2,
    "imported": 1,
    "skipped": 1,
    "errors": [],
    "warnings": [],
}

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ── Lecture ───────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_list_barques_200(client, mocker):
    mock_list = mocker.patch(f"{SERVICE}.list_barques", AsyncMock(return_value={
        "items": [make_barque(gerant=make_gerant())],
        "total": 1,
        "total_pages": 1,
        "current_page": 1,
    }))

    resp = await client.get("/api/barques", params={"page": 1, "limit": 5, "search": "12/3"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["totalPages"] == 1
    assert body["currentPage"] == 1
    assert body["items"][0]["portAttache"] == "12/3"
    assert body["items"][0]["gerant"]["prenom"] == "Karim"
    assert "password" not in body["items"][0]["gerant"]
    assert mock_list.await_args.kwargs == {"page": 1, "limit": 5, "search": "12/3"}


@pytest.mark.asyncio
async def test_get_barque_404(client, mocker):
    mocker.patch(f"{SERVICE}.get_barque", AsyncMock(side_effect=NotFoundError("Barque non trouvée")))

    resp = await client.get("/api/barques/99")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Barque non trouvée", "code": "NOT_FOUND"}


# ── Écriture ──────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_barque_201(client, mocker):
    mock_create = mocker.patch(f"{SERVICE}.create_barque", AsyncMock(return_value=make_barque()))

    resp = await client.post("/api/barques", json=VALID_BODY)

    assert resp.status_code == 201
    assert resp.json()["immatriculation"] == "12/3-4567"
    payload = mock_create.await_args.args[1]
    assert payload.port_attache == "12/3"


@pytest.mark.asyncio
async def test_create_barque_doublon_409(client, mocker):
    mocker.patch(f"{SERVICE}.create_barque", AsyncMock(side_effect=AlreadyExistsError(
        "Une barque avec l'immatriculation 12/3-4567 existe déjà", field="immatriculation",
    )))

    resp = await client.post("/api/barques", json=VALID_BODY)

    assert resp.status_code == 409
    assert resp.json()["code"] == "ALREADY_EXISTS"
    assert resp.json()["field"] == "immatriculation"


@pytest.mark.asyncio
async def test_create_barque_validation_422(client, mocker):
    mocker.patch(f"{SERVICE}.create_barque", AsyncMock(side_effect=ValidationFailed(
        {"immatriculation": "L'immatriculation doit être au format XX/X-XXXX (ex: 10/1-5256)"},
    )))

    resp = await client.post("/api/barques", json=VALID_BODY)

    assert resp.status_code == 422
    assert resp.json()["code"] == "VALIDATION_ERROR"
    assert "immatriculation" in resp.json()["errors"]


@pytest.mark.asyncio
async def test_create_barque_corps_incomplet_422(client):
    resp = await client.post("/api/barques", json={"nom": "Ma Barque"})

    assert resp.status_code == 422
    assert "immatriculation" in resp.json()["errors"]


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["put", "patch"])
async def test_update_barque_200(client, mocker, method):
    mocker.patch(
        f"{SERVICE}.update_barque",
        AsyncMock(return_value=make_barque(statut="en_maintenance")),
    )

    resp = await getattr(client, method)("/api/barques/1", json={"statut": "en_maintenance"})

    assert resp.status_code == 200
    assert resp.json()["statut"] == "en_maintenance"


@pytest.mark.asyncio
async def test_delete_barque_204(client, mocker):
    mock_delete = mocker.patch(f"{SERVICE}.delete_barque", AsyncMock(return_value=None))

    resp = await client.delete("/api/barques/1")

    assert resp.status_code == 204
    assert resp.content == b""
    mock_delete.assert_awaited_once()


@pytest.mark.asyncio
async def test_erreur_non_geree_500(raw_client, mocker):
    mocker.patch(f"{SERVICE}.get_barque", AsyncMock(side_effect=RuntimeError("boom")))

    resp = await raw_client.get("/api/barques/1")

    assert resp.status_code == 500
    assert resp.json()["error"] == "Internal server error"


# ── Import ────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_init_default_gerant(client, mocker):
    mocker.patch(
        f"{SERVICE}.init_default_gerant",
        AsyncMock(return_value=make_gerant(nom="Admin", prenom="System", email="admin@system.com")),
    )

    resp = await client.post("/api/barques/init-default-gerant")

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["gerant"]["email"] == "admin@system.com"


@pytest.mark.asyncio
async def test_bulk_import_200(client, mocker):
    mock_bulk = mocker.patch(f"{SERVICE}.bulk_import", AsyncMock(return_value=IMPORT_RESULT))

    resp = await client.post("/api/barques/bulk", json=[VALID_BODY, {**VALID_BODY, "immatriculation": "12/3"}])

    assert resp.status_code == 200
    assert resp.json()["imported"] == 1
    rows = mock_bulk.await_args.args[1]
    assert rows[0]["portAttache"] == "12/3"


@pytest.mark.asyncio
async def test_bulk_import_resultat_refuse_reste_200(client, mocker):
    mocker.patch(f"{SERVICE}.bulk_import", AsyncMock(return_value={
        **IMPORT_RESULT,
        "success": False,
        "imported": 0,
        "skipped": 0,
        "errors": [{"message": "Missing required fields", "line": 1, "code": "MISSING_FIELDS"}],
        "error": "Validation failed for some barques",
    }))

    resp = await client.post("/api/barques/bulk", json=[{"nom": "x"}])

    assert resp.status_code == 200
    assert resp.json()["success"] is False
    assert resp.json()["errors"][0]["code"] == "MISSING_FIELDS"


@pytest.mark.asyncio
async def test_bulk_import_pas_un_tableau_400(client):
    resp = await client.post("/api/barques/bulk", json={"nom": "x"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid data format. Expected an array of barques."}


@pytest.mark.asyncio
async def test_bulk_import_tableau_vide_400(client):
    resp = await client.post("/api/barques/bulk", json=[])

    assert resp.status_code == 400
    assert resp.json() == {"error": "Empty array provided."}


@pytest.mark.asyncio
async def test_bulk_import_exception_500(client, mocker):
    mocker.patch.object(settings, "DEBUG", False)
    mocker.patch(f"{SERVICE}.bulk_import", AsyncMock(side_effect=RuntimeError("base indisponible")))

    resp = await client.post("/api/barques/bulk", json=[VALID_BODY])

    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "error": "An error occurred during bulk import",
        "details": None,
    }


@pytest.mark.asyncio
async def test_bulk_import_exception_500_debug(client, mocker):
    mocker.patch.object(settings, "DEBUG", True)
    mocker.patch(f"{SERVICE}.bulk_import", AsyncMock(side_effect=RuntimeError("base indisponible")))

    resp = await client.post("/api/barques/bulk", json=[VALID_BODY])

    assert resp.status_code == 500
    assert resp.json()["error"] == "base indisponible"
    assert "RuntimeError" in resp.json()["details"]


@pytest.mark.asyncio
async def test_import_fichier_200(client, mocker):
    mock_bulk = mocker.patch(f"{SERVICE}.bulk_import", AsyncMock(return_value=IMPORT_RESULT))
    content = make_xlsx([("Pêche Côtière", "12/3-4567", "Ma Barque", "12/3")])

    resp = await client.post("/api/barques/import", files={"file": ("barques.xlsx", content, XLSX_TYPE)})

    assert resp.status_code == 200
    rows = mock_bulk.await_args.args[1]
    assert rows[0]["immatriculation"] == "12/3-4567"
    assert rows[0]["statut"] == "actif"


@pytest.mark.asyncio
async def test_import_fichier_colonne_manquante_400(client, mocker):
    mock_bulk = mocker.patch(f"{SERVICE}.bulk_import", AsyncMock())
    content = make_xlsx([("A", "12/3", "B")], headers=["Affiliation", "Immatriculation", "Nom de barque"])

    resp = await client.post("/api/barques/import", files={"file": ("barques.xlsx", content, XLSX_TYPE)})

    assert resp.status_code == 400
    assert "Port d'Attache" in resp.json()["error"]
    mock_bulk.assert_not_awaited()
