# tests/client/test_api.py
"""
Tests du client HTTP GestMarineAPI sur un httpx.MockTransport.

Couverture :
    - validation locale avant envoi (aucune requête émise)
    - corps envoyé en camelCase
    - erreurs HTTP → ApiError(code=status, message, field, validation_errors)
    - 204 → None, réseau injoignable → NETWORK_ERROR
"""
import json

import httpx
import pytest

from app.client.api import ApiError, GestMarineAPI

pytestmark = pytest.mark.client

VALID_BARQUE = {
    "nom": "Ma Barque",
    "immatriculation": "12/3-4567",
    "portAttache": "12/3",
    "affiliation": "Pêche Côtière",
}


class Recorder:
    """Handler MockTransport : mémorise les requêtes, répond `response`."""

    def __init__(self, status_code=200, body=None):
        self.requests = []
        self.status_code = status_code
        self.body = body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)


def make_api(handler) -> GestMarineAPI:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    return GestMarineAPI(client=client)


# ── Validation locale ──────────────────────────────────────────────────────

class TestLocalValidation:
    async def test_immatriculation_invalide_sans_requete(self):
        handler = Recorder(body={})
        async with make_api(handler) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.create_barque({**VALID_BARQUE, "immatriculation": "123"})
        assert exc_info.value.code == "VALIDATION_ERROR"
        assert exc_info.value.field == "immatriculation"
        assert "immatriculation" in exc_info.value.validation_errors
        assert handler.requests == []

    async def test_champ_requis_manquant(self):
        handler = Recorder(body={})
        async with make_api(handler) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.create_barque({"nom": "Ma Barque"})
        assert exc_info.value.code == "VALIDATION_ERROR"
        assert handler.requests == []

    async def test_import_gerants_refuse_localement(self):
        handler = Recorder(body={})
        async with make_api(handler) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.bulk_import_gerants([{"cine": "bad"}])
        assert "ligne_1" in exc_info.value.validation_errors
        assert handler.requests == []


# ── Requêtes ───────────────────────────────────────────────────────────────

class TestRequests:
    async def test_create_barque_envoie_du_camel_case(self):
        handler = Recorder(status_code=201, body={"id": 1, **VALID_BARQUE})
        async with make_api(handler) as api:
            result = await api.create_barque(VALID_BARQUE)

        assert result["id"] == 1
        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/barques"
        sent = json.loads(request.content)
        assert sent["portAttache"] == "12/3"
        assert "port_attache" not in sent

    async def test_update_barque_partiel_en_put(self):
        handler = Recorder(body={"id": 4, "statut": "actif"})
        async with make_api(handler) as api:
            await api.update_barque(4, {"statut": "actif"})

        request = handler.requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/api/barques/4"
        assert json.loads(request.content) == {"statut": "actif"}

    async def test_get_barques_omet_la_recherche_vide(self):
        handler = Recorder(body={"items": [], "total": 0, "totalPages": 0, "currentPage": 1})
        async with make_api(handler) as api:
            await api.get_barques(page=2, limit=5, search="")

        params = handler.requests[0].url.params
        assert params["page"] == "2"
        assert params["limit"] == "5"
        assert "search" not in params

    async def test_delete_204_retourne_none(self):
        handler = Recorder(status_code=204)
        async with make_api(handler) as api:
            assert await api.delete_barque(3) is None
        assert handler.requests[0].method == "DELETE"

    async def test_check_cine_exists(self):
        handler = Recorder(body={"exists": True})
        async with make_api(handler) as api:
            assert await api.check_cine_exists("AB123456") is True
        assert handler.requests[0].url.path == "/api/gerants/check-cine/AB123456"

    async def test_generate_periodes(self):
        handler = Recorder(status_code=201, body={"created": [], "skipped": 2})
        async with make_api(handler) as api:
            result = await api.generate_periodes(1, [1, 2], 2025, 3)
        assert result["skipped"] == 2
        assert json.loads(handler.requests[0].content) == {"barque_ids": [1, 2], "annee": 2025, "mois": 3}


# ── Erreurs ────────────────────────────────────────────────────────────────

class TestErrors:
    async def test_conflit_409(self):
        handler = Recorder(status_code=409, body={
            "error": "Une barque avec l'immatriculation 12/3-4567 existe déjà",
            "code": "ALREADY_EXISTS",
            "field": "immatriculation",
        })
        async with make_api(handler) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.create_barque(VALID_BARQUE)
        assert exc_info.value.code == "409"
        assert exc_info.value.field == "immatriculation"
        assert "existe déjà" in exc_info.value.message

    async def test_erreurs_de_validation_serveur(self):
        handler = Recorder(status_code=422, body={
            "error": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": {"nom": "Le nom doit contenir entre 2 et 50 caractères"},
        })
        async with make_api(handler) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.get_barque(1)
        assert exc_info.value.code == "422"
        assert exc_info.value.validation_errors == {"nom": "Le nom doit contenir entre 2 et 50 caractères"}

    async def test_message_detail(self):
        handler = Recorder(status_code=404, body={"detail": "Not Found"})
        async with make_api(handler) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.get_barque(99)
        assert exc_info.value.message == "Not Found"

    async def test_reseau_injoignable(self):
        def handler(request):
            raise httpx.ConnectError("connexion refusée", request=request)

        async with make_api(handler) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.get_barques()
        assert exc_info.value.code == "NETWORK_ERROR"
