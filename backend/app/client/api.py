# app/client/api.py
"""
Client HTTP de l'API GestMarine (httpx, async).

Rôle des anciens services du frontend : chaque méthode correspond à un
endpoint. Barques et gérants sont validés localement AVANT l'envoi, avec
les mêmes validateurs que le serveur ; un échec lève ApiError sans
aller-retour réseau.

Toutes les erreurs sortent en ApiError :
    validation locale   code="VALIDATION_ERROR", validation_errors={champ: msg}
    réponse HTTP != 2xx code=str(status), message tiré de error/message/detail
    réseau injoignable  code="NETWORK_ERROR"
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Type, Union

import httpx
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.engine.validation.barque import validate_barque
from app.engine.validation.common import ValidationResult, validate_import
from app.engine.validation.gerant import validate_gerant
from app.modules.barque.schemas import BarqueCreateIn, BarqueUpdateIn
from app.modules.gerant.schemas import GerantCreateIn, GerantUpdateIn

logger = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], BaseModel]


class ApiError(Exception):

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        field: Optional[str] = None,
        validation_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.field = field
        self.validation_errors = validation_errors or {}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Une erreur est survenue"
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return "Une erreur est survenue"


def _params(**filters) -> Dict[str, Any]:
    return {key: value for key, value in filters.items() if value is not None}


def _checked(schema: Type[BaseModel], data: Payload, validator) -> Dict[str, Any]:
    """Parse + validation métier ; retourne le corps JSON (camelCase)."""
    try:
        model = data if isinstance(data, schema) else schema.model_validate(
            data.model_dump(exclude_unset=True) if isinstance(data, BaseModel) else dict(data)
        )
    except ValidationError as exc:
        errors = {str(err["loc"][-1]): err["msg"] for err in exc.errors() if err.get("loc")}
        raise ApiError("Validation failed", "VALIDATION_ERROR", validation_errors=errors)

    raise_if_invalid(validator(model))
    return model.model_dump(by_alias=True, exclude_unset=True, mode="json")


def raise_if_invalid(result: ValidationResult) -> None:
    if not result.is_valid:
        field = next(iter(result.errors), None)
        raise ApiError(
            "Validation failed", "VALIDATION_ERROR", field=field,
            validation_errors=result.errors,
        )


class GestMarineAPI:
    """
    client : httpx.AsyncClient injectable (tests : ASGITransport ou mock).
    Sans client fourni, un AsyncClient est créé sur base_url.
    """

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self._client = client or httpx.AsyncClient(base_url=base_url or settings.API_URL)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GestMarineAPI":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s injoignable : %s", method, url, exc)
            raise ApiError(f"Serveur injoignable : {exc}", "NETWORK_ERROR") from exc

        if response.is_error:
            body = {}
            try:
                body = response.json()
            except ValueError:
                pass
            raise ApiError(
                _error_message(response),
                str(response.status_code),
                field=body.get("field") if isinstance(body, dict) else None,
                validation_errors=body.get("errors") if isinstance(body, dict) else None,
            )
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ── Barques ───────────────────────────────────────────────

    async def get_barques(self, page: int = 1, limit: int = 10, search: Optional[str] = None) -> Dict:
        return await self._request(
            "GET", "/api/barques", params=_params(page=page, limit=limit, search=search or None)
        )

    async def get_barque(self, barque_id: int) -> Dict:
        return await self._request("GET", f"/api/barques/{barque_id}")

    async def create_barque(self, data: Payload) -> Dict:
        body = _checked(BarqueCreateIn, data, validate_barque)
        return await self._request("POST", "/api/barques", json=body)

    async def update_barque(self, barque_id: int, data: Payload) -> Dict:
        body = _checked(BarqueUpdateIn, data, validate_barque)
        return await self._request("PUT", f"/api/barques/{barque_id}", json=body)

    async def delete_barque(self, barque_id: int) -> None:
        await self._request("DELETE", f"/api/barques/{barque_id}")

    async def init_default_gerant(self) -> Dict:
        return await self._request("POST", "/api/barques/init-default-gerant")

    async def bulk_import_barques(self, records: List[Dict[str, Any]]) -> Dict:
        """Résultat d'import (success=false inclus : le serveur répond 200)."""
        return await self._request("POST", "/api/barques/bulk", json=records)

    # ── Gérants ───────────────────────────────────────────────

    async def get_gerants(
        self, search: Optional[str] = None, cine: Optional[str] = None, email: Optional[str] = None
    ) -> Dict:
        return await self._request(
            "GET", "/api/gerants", params=_params(search=search, cine=cine, email=email)
        )

    async def create_gerant(self, data: Payload) -> Dict:
        body = _checked(GerantCreateIn, data, validate_gerant)
        return await self._request("POST", "/api/gerants", json=body)

    async def update_gerant(self, gerant_id: int, data: Payload) -> Dict:
        body = _checked(GerantUpdateIn, data, validate_gerant)
        return await self._request("PATCH", f"/api/gerants/{gerant_id}", json=body)

    async def delete_gerant(self, gerant_id: int) -> None:
        await self._request("DELETE", f"/api/gerants/{gerant_id}")

    async def check_cine_exists(self, cine: str) -> bool:
        data = await self._request("GET", f"/api/gerants/check-cine/{cine}")
        return bool(data["exists"])

    async def get_gerant_barques(self, gerant_id: int) -> List[Dict]:
        data = await self._request("GET", f"/api/gerants/{gerant_id}/barques")
        return data["items"]

    async def bulk_import_gerants(self, records: List[Dict[str, Any]]) -> Dict:
        raise_if_invalid(validate_import(records, validate_gerant))
        return await self._request("POST", "/api/gerants/bulk", json=records)

    # ── Responsables ──────────────────────────────────────────

    async def get_responsables(
        self, gerant_id: int, actif: Optional[bool] = None, search: Optional[str] = None
    ) -> List[Dict]:
        return await self._request(
            "GET", f"/api/gerants/{gerant_id}/responsables",
            params=_params(actif=actif, search=search),
        )

    async def create_responsable(self, gerant_id: int, data: Mapping[str, Any]) -> Dict:
        return await self._request("POST", f"/api/gerants/{gerant_id}/responsables", json=dict(data))

    async def update_responsable(self, gerant_id: int, responsable_id: int, data: Mapping[str, Any]) -> Dict:
        return await self._request(
            "PATCH", f"/api/gerants/{gerant_id}/responsables/{responsable_id}", json=dict(data)
        )

    async def assign_barque(self, gerant_id: int, responsable_id: int, barque_id: int) -> Dict:
        return await self._request(
            "POST", f"/api/gerants/{gerant_id}/responsables/{responsable_id}/barques",
            json={"barque_id": barque_id},
        )

    # ── Tarifs ────────────────────────────────────────────────

    async def get_tarifs(self, gerant_id: int, **filters) -> List[Dict]:
        return await self._request("GET", f"/api/gerants/{gerant_id}/tarifs", params=_params(**filters))

    async def create_tarif(self, gerant_id: int, data: Mapping[str, Any]) -> Dict:
        return await self._request("POST", f"/api/gerants/{gerant_id}/tarifs", json=dict(data))

    async def update_tarif(self, gerant_id: int, tarif_id: int, data: Mapping[str, Any]) -> Dict:
        return await self._request("PATCH", f"/api/gerants/{gerant_id}/tarifs/{tarif_id}", json=dict(data))

    # ── Périodes ──────────────────────────────────────────────

    async def get_periodes(self, gerant_id: int, **filters) -> List[Dict]:
        return await self._request("GET", f"/api/gerants/{gerant_id}/periodes", params=_params(**filters))

    async def create_periode(self, gerant_id: int, data: Mapping[str, Any]) -> Dict:
        return await self._request("POST", f"/api/gerants/{gerant_id}/periodes", json=dict(data))

    async def update_periode(self, gerant_id: int, periode_id: int, data: Mapping[str, Any]) -> Dict:
        return await self._request(
            "PATCH", f"/api/gerants/{gerant_id}/periodes/{periode_id}", json=dict(data)
        )

    async def generate_periodes(self, gerant_id: int, barque_ids: List[int], annee: int, mois: int) -> Dict:
        return await self._request(
            "POST", f"/api/gerants/{gerant_id}/periodes/generate",
            json={"barque_ids": barque_ids, "annee": annee, "mois": mois},
        )

    # ── Paiements ─────────────────────────────────────────────

    async def get_paiements(self, gerant_id: int, **filters) -> List[Dict]:
        return await self._request("GET", f"/api/gerants/{gerant_id}/paiements", params=_params(**filters))

    async def create_paiement(self, gerant_id: int, data: Mapping[str, Any]) -> Dict:
        return await self._request("POST", f"/api/gerants/{gerant_id}/paiements", json=dict(data))

    async def get_paiement_summary(self, gerant_id: int, annee: int, mois: int) -> Dict:
        return await self._request(
            "GET", f"/api/gerants/{gerant_id}/paiements/summary",
            params={"annee": annee, "mois": mois},
        )

    # ── Rapports ──────────────────────────────────────────────

    async def get_rapport(self, gerant_id: int, **filters) -> Dict:
        return await self._request("GET", f"/api/gerants/{gerant_id}/rapports", params=_params(**filters))
