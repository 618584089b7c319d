# tests/modules/gerant/test_service.py
"""
Tests unitaires pour modules.gerant.service : GerantService.

Couverture :
    create_gerant → validation, unicité CINE / email
    update_gerant → unicité contrôlée seulement si la valeur change
    delete_gerant → refus si des paiements existent
    list_barques  → 404 si gérant inconnu
    bulk_import   → champs manquants, format, doublons (base et lot), insertion
"""
import pytest
from unittest.mock import AsyncMock

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import AlreadyExistsError, ConflictError, NotFoundError, ValidationFailed
from app.modules.gerant.service import GerantService
from tests.conftest import make_async_db, make_barque, make_gerant, make_payload

pytestmark = pytest.mark.service

service = GerantService()

REPO = "app.modules.gerant.service.repo"

VALID = {
    "nom": "Alaoui",
    "prenom": "Karim",
    "cine": "AB123456",
    "telephone": "0612345678",
    "email": "karim@example.ma",
    "password": "secret123",
}


@pytest.fixture
def unique(mocker):
    """Aucun CINE ni email connu."""
    return (
        mocker.patch(f"{REPO}.cine_exists", AsyncMock(return_value=False)),
        mocker.patch(f"{REPO}.email_exists", AsyncMock(return_value=False)),
    )


# ── create_gerant ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_gerant(mocker, unique):
    mock_create = mocker.patch(f"{REPO}.create", AsyncMock(return_value=make_gerant()))

    result = await service.create_gerant(make_async_db(), make_payload(**VALID))

    assert result.cine == "AB123456"
    assert mock_create.await_args.args[1]["email"] == "karim@example.ma"


@pytest.mark.asyncio
async def test_create_cine_invalide(mocker):
    mock_create = mocker.patch(f"{REPO}.create", AsyncMock())

    with pytest.raises(ValidationFailed) as exc_info:
        await service.create_gerant(make_async_db(), make_payload(**{**VALID, "cine": "ab12"}))

    assert "cine" in exc_info.value.errors
    mock_create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_cine_deja_utilise(mocker):
    mocker.patch(f"{REPO}.cine_exists", AsyncMock(return_value=True))

    with pytest.raises(AlreadyExistsError) as exc_info:
        await service.create_gerant(make_async_db(), make_payload(**VALID))

    assert exc_info.value.message == "Ce CINE est déjà utilisé"
    assert exc_info.value.field == "cine"


@pytest.mark.asyncio
async def test_create_email_deja_utilise(mocker):
    mocker.patch(f"{REPO}.cine_exists", AsyncMock(return_value=False))
    mocker.patch(f"{REPO}.email_exists", AsyncMock(return_value=True))

    with pytest.raises(AlreadyExistsError) as exc_info:
        await service.create_gerant(make_async_db(), make_payload(**VALID))

    assert exc_info.value.field == "email"


# ── update_gerant ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_update_meme_cine_pas_de_controle(mocker, unique):
    gerant = make_gerant()
    mocker.patch(f"{REPO}.get_by_id", AsyncMock(return_value=gerant))
    mocker.patch(f"{REPO}.update", AsyncMock(return_value=gerant))

    await service.update_gerant(make_async_db(), 1, make_payload(cine="AB123456", nom="Bennani"))

    unique[0].assert_not_awaited()


@pytest.mark.asyncio
async def test_update_nouveau_cine_deja_pris(mocker):
    mocker.patch(f"{REPO}.get_by_id", AsyncMock(return_value=make_gerant()))
    mock_exists = mocker.patch(f"{REPO}.cine_exists", AsyncMock(return_value=True))

    with pytest.raises(AlreadyExistsError):
        await service.update_gerant(make_async_db(), 1, make_payload(cine="CD654321"))

    assert mock_exists.await_args.kwargs == {"exclude_id": 1}


@pytest.mark.asyncio
async def test_update_introuvable(mocker):
    mocker.patch(f"{REPO}.get_by_id", AsyncMock(return_value=None))

    with pytest.raises(NotFoundError, match="Gérant non trouvé"):
        await service.update_gerant(make_async_db(), 9, make_payload(nom="Bennani"))


# ── delete_gerant / list_barques ──────────────────────────────────────────────

@pytest.mark.asyncio
async def test_delete_refuse_si_paiements(mocker):
    mocker.patch(f"{REPO}.get_by_id", AsyncMock(return_value=make_gerant()))
    mocker.patch(f"{REPO}.count_paiements", AsyncMock(return_value=3))
    mock_delete = mocker.patch(f"{REPO}.delete", AsyncMock())

    with pytest.raises(ConflictError):
        await service.delete_gerant(make_async_db(), 1)

    mock_delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_sans_paiement(mocker):
    mocker.patch(f"{REPO}.get_by_id", AsyncMock(return_value=make_gerant()))
    mocker.patch(f"{REPO}.count_paiements", AsyncMock(return_value=0))
    mock_delete = mocker.patch(f"{REPO}.delete", AsyncMock())

    await service.delete_gerant(make_async_db(), 1)

    mock_delete.assert_awaited_once()


@pytest.mark.asyncio
async def test_list_barques(mocker):
    mocker.patch(f"{REPO}.get_by_id", AsyncMock(return_value=make_gerant()))
    mocker.patch(
        "app.modules.gerant.service.barque_repo.list_by_gerant",
        AsyncMock(return_value=[make_barque(), make_barque(id=2)]),
    )

    assert len(await service.list_barques(make_async_db(), 1)) == 2


# ── bulk_import ───────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_bulk_import_ligne_par_ligne(mocker, unique):
    mock_insert = mocker.patch(f"{REPO}.insert_in_savepoint", AsyncMock())
    mock_commit = mocker.patch(f"{REPO}.commit", AsyncMock())
    records = [
        VALID,
        {**VALID, "cine": "CD654321", "email": "autre@example.ma", "telephone": ""},
        {**VALID, "cine": "EF111111", "email": "pas-un-email"},
        {**VALID, "email": "troisieme@example.ma"},
        {**VALID, "cine": "GH222222", "email": "quatrieme@example.ma"},
    ]

    result = await service.bulk_import(make_async_db(), records)

    assert result["total"] == 5
    assert result["imported"] == 2
    assert result["skipped"] == 1
    codes = [(e["line"], e["code"]) for e in result["errors"]]
    assert codes == [(2, "MISSING_FIELDS"), (3, "VALIDATION_ERROR")]
    assert result["errors"][0]["field"] == "telephone"
    assert mock_insert.await_count == 2
    mock_commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_bulk_import_deja_en_base(mocker):
    mocker.patch(f"{REPO}.cine_exists", AsyncMock(return_value=True))
    mocker.patch(f"{REPO}.email_exists", AsyncMock(return_value=False))
    mock_insert = mocker.patch(f"{REPO}.insert_in_savepoint", AsyncMock())
    mocker.patch(f"{REPO}.commit", AsyncMock())

    result = await service.bulk_import(make_async_db(), [VALID])

    assert result["skipped"] == 1
    assert result["imported"] == 0
    mock_insert.assert_not_awaited()


@pytest.mark.asyncio
async def test_bulk_import_erreur_insertion(mocker, unique):
    mocker.patch(f"{REPO}.insert_in_savepoint", AsyncMock(side_effect=SQLAlchemyError("disk full")))
    mocker.patch(f"{REPO}.commit", AsyncMock())

    result = await service.bulk_import(make_async_db(), [VALID])

    assert result["imported"] == 0
    assert result["errors"][0]["code"] == "INSERT_ERROR"
    assert result["errors"][0]["line"] == 1
