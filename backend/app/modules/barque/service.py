# modules/barque/service.py
"""
Orchestration du CRUD barque et de l'import en masse.

Pipeline d'import (bulk_import) :
    1. gérant par défaut (idempotent)
    2. validation de TOUTES les lignes ; une seule erreur → rien n'est écrit
    3. une requête pour les immatriculations déjà en base → skipped
    4. insertion par lots (une transaction par lot, un SAVEPOINT par ligne)
    5. agrégation du résultat

Pas de verrou global : deux imports concurrents du même fichier se
départagent sur la contrainte d'unicité, le perdant reçoit des erreurs
d'insertion (pas des skips).
"""
import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import AlreadyExistsError, NotFoundError
from app.engine.validation.barque import validate_barque, validate_import_record
from app.engine.validation.common import throw_if_invalid
from app.modules.barque.repository import BarqueRepository
from app.modules.barque.schemas import BarqueImportIn
from app.shared.enums import BarqueStatut
from app.shared.models import Barque, Gerant

logger = logging.getLogger(__name__)

repo = BarqueRepository()

REQUIRED_IMPORT_FIELDS = ("nom", "immatriculation", "port_attache")


def _parse_record(record: Any) -> Tuple[Dict[str, Any], List[Tuple[str, str]]]:
    """Champs snake_case d'une ligne importée + erreurs de type (champ, message)."""
    if hasattr(record, "model_dump"):
        return record.model_dump(), []
    if not isinstance(record, dict):
        record = {}
    try:
        return BarqueImportIn.model_validate(record).model_dump(), []
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else ""
            if field in BarqueImportIn.model_fields:
                field = to_camel(field)
            problems.append((field, err["msg"]))
        raw = record.get("immatriculation")
        return {"immatriculation": raw if isinstance(raw, str) else None}, problems


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class BarqueService:

    # ── Lecture ───────────────────────────────────────────────

    async def list_barques(
        self, db: AsyncSession, page: int = 1, limit: int = 10, search: Optional[str] = None
    ) -> Dict:
        page = max(page, 1)
        limit = min(max(limit, 1), settings.PAGE_SIZE_MAX)
        total, items = await repo.get_page(db, page, limit, search or None)
        return {
            "items": items,
            "total": total,
            "total_pages": math.ceil(total / limit),
            "current_page": page,
        }

    async def get_barque(self, db: AsyncSession, barque_id: int) -> Barque:
        barque = await repo.get_by_id(db, barque_id)
        if not barque:
            raise NotFoundError("Barque non trouvée")
        return barque

    async def list_for_gerant(self, db: AsyncSession, gerant_id: int) -> List[Barque]:
        return await repo.list_by_gerant(db, gerant_id)

    # ── Écriture ──────────────────────────────────────────────

    async def create_barque(self, db: AsyncSession, payload) -> Barque:
        data = payload.model_dump(exclude_unset=True)
        throw_if_invalid(validate_barque(data))
        await self._check_references(db, data)

        data.setdefault("statut", None)
        data["statut"] = data["statut"] or BarqueStatut.INACTIF.value
        data.setdefault("gerant_id", None)

        try:
            barque = await repo.create(db, data)
        except IntegrityError:
            raise AlreadyExistsError(
                f"Une barque avec l'immatriculation {data['immatriculation']} existe déjà",
                field="immatriculation",
            )
        logger.info("Barque créée id=%s immatriculation=%s", barque.id, barque.immatriculation)
        return barque

    async def update_barque(self, db: AsyncSession, barque_id: int, payload) -> Barque:
        barque = await self.get_barque(db, barque_id)
        data = payload.model_dump(exclude_unset=True)
        throw_if_invalid(validate_barque(data))
        await self._check_references(db, data)

        try:
            return await repo.update(db, barque, data)
        except IntegrityError:
            raise AlreadyExistsError(
                f"Une barque avec l'immatriculation {data.get('immatriculation')} existe déjà",
                field="immatriculation",
            )

    async def delete_barque(self, db: AsyncSession, barque_id: int) -> None:
        barque = await self.get_barque(db, barque_id)
        await repo.delete(db, barque)
        logger.info("Barque supprimée id=%s", barque_id)

    async def _check_references(self, db: AsyncSession, data: Dict[str, Any]) -> None:
        if data.get("gerant_id") is not None and not await repo.gerant_exists(db, data["gerant_id"]):
            raise NotFoundError("Gérant non trouvé")
        if data.get("responsable_id") is not None and not await repo.responsable_exists(
            db, data["responsable_id"]
        ):
            raise NotFoundError("Responsable non trouvé")

    # ── Import en masse ───────────────────────────────────────

    async def init_default_gerant(self, db: AsyncSession) -> Gerant:
        gerant = await repo.get_or_create_default_gerant(db, settings.DEFAULT_GERANT_EMAIL)
        logger.info("Gérant par défaut prêt id=%s", gerant.id)
        return gerant

    def validate_import_records(self, records: Sequence[Any]) -> List[Dict]:
        """Erreurs par ligne (1-based), champs nommés comme dans le JSON reçu."""
        errors: List[Dict] = []
        for line, record in enumerate(records, start=1):
            data, type_errors = _parse_record(record)
            immatriculation = data.get("immatriculation")

            if type_errors:
                errors.extend(
                    {
                        "message": message,
                        "immatriculation": immatriculation,
                        "line": line,
                        "field": field,
                        "code": "INVALID_FORMAT",
                    }
                    for field, message in type_errors
                )
                continue

            if not all(data.get(key) for key in REQUIRED_IMPORT_FIELDS):
                errors.append({
                    "message": "Missing required fields",
                    "immatriculation": immatriculation,
                    "line": line,
                    "code": "MISSING_FIELDS",
                })
                continue

            checked = {
                "immatriculation": data["immatriculation"],
                "port_attache": data["port_attache"],
            }
            if data.get("statut"):
                checked["statut"] = data["statut"]

            result = validate_import_record(checked)
            for field, message in result.errors.items():
                errors.append({
                    "message": message,
                    "immatriculation": immatriculation,
                    "line": line,
                    "field": to_camel(field),
                    "code": "INVALID_FORMAT",
                })
        return errors

    async def bulk_import(self, db: AsyncSession, records: Sequence[Any]) -> Dict:
        total = len(records)
        logger.info("Import de %d barques", total)

        gerant_id = (await self.init_default_gerant(db)).id

        errors = self.validate_import_records(records)
        if errors:
            logger.info("Import refusé : %d erreurs de validation", len(errors))
            return {
                "success": False,
                "total": total,
                "imported": 0,
                "skipped": 0,
                "errors": errors,
                "warnings": [],
                "error": "Validation failed for some barques",
            }

        rows = [_parse_record(record)[0] for record in records]
        existing = await repo.existing_immatriculations(
            db, [_clean(row["immatriculation"]) for row in rows]
        )
        new_rows = [row for row in rows if _clean(row["immatriculation"]) not in existing]
        skipped = total - len(new_rows)
        logger.info("%d doublons ignorés, %d barques à insérer", skipped, len(new_rows))

        imported = 0
        chunk_size = max(settings.IMPORT_CHUNK_SIZE, 1)
        chunk_count = math.ceil(len(new_rows) / chunk_size)
        for index, start in enumerate(range(0, len(new_rows), chunk_size), start=1):
            chunk = new_rows[start:start + chunk_size]
            for row in chunk:
                try:
                    await repo.insert_in_savepoint(db, {
                        "nom": _clean(row["nom"]),
                        "immatriculation": _clean(row["immatriculation"]),
                        "port_attache": _clean(row["port_attache"]),
                        "affiliation": _clean(row.get("affiliation")),
                        "statut": row.get("statut") or BarqueStatut.ACTIF.value,
                        "gerant_id": gerant_id,
                    })
                    imported += 1
                except SQLAlchemyError as exc:
                    logger.warning("Insertion refusée %s : %s", row["immatriculation"], exc)
                    errors.append({
                        "message": f"Failed to create barque: {exc}",
                        "immatriculation": row["immatriculation"],
                    })
            await repo.commit(db)
            logger.info("Lot %d/%d traité, %d importées", index, chunk_count, imported)

        return {
            "success": not errors,
            "total": total,
            "imported": imported,
            "skipped": skipped,
            "errors": errors,
            "warnings": [],
        }
