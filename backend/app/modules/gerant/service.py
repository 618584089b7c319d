# modules/gerant/service.py
"""
CRUD gérant + contrôle d'unicité CINE / email.

Unicité : vérifiée à la création, et à la mise à jour uniquement si la
valeur soumise diffère de la valeur stockée (sinon le gérant entrerait
en conflit avec lui-même).
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AlreadyExistsError, ConflictError, NotFoundError
from app.engine.validation.common import throw_if_invalid
from app.engine.validation.gerant import validate_gerant
from app.modules.barque.repository import BarqueRepository
from app.modules.gerant.repository import GerantRepository
from app.shared.models import Barque, Gerant

logger = logging.getLogger(__name__)

repo        = GerantRepository()
barque_repo = BarqueRepository()

GERANT_FIELDS = ("nom", "prenom", "cine", "telephone", "email", "password")

MSG_CINE_TAKEN  = "Ce CINE est déjà utilisé"
MSG_EMAIL_TAKEN = "Cet email est déjà utilisé"


class GerantService:

    # ── Lecture ───────────────────────────────────────────────

    async def list_gerants(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        cine: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Dict:
        total, items = await repo.list(db, search=search, cine=cine, email=email)
        return {"items": items, "total": total}

    async def get_gerant(self, db: AsyncSession, gerant_id: int) -> Gerant:
        gerant = await repo.get_by_id(db, gerant_id)
        if not gerant:
            raise NotFoundError("Gérant non trouvé")
        return gerant

    async def check_cine(self, db: AsyncSession, cine: str) -> bool:
        return await repo.cine_exists(db, cine)

    async def list_barques(self, db: AsyncSession, gerant_id: int) -> List[Barque]:
        await self.get_gerant(db, gerant_id)
        return await barque_repo.list_by_gerant(db, gerant_id)

    # ── Écriture ──────────────────────────────────────────────

    async def create_gerant(self, db: AsyncSession, payload) -> Gerant:
        data = payload.model_dump(exclude_unset=True)
        throw_if_invalid(validate_gerant(data))
        await self._check_unique(db, data)

        try:
            gerant = await repo.create(db, data)
        except IntegrityError:
            raise AlreadyExistsError("Un gérant avec ce CINE ou cet email existe déjà")
        logger.info("Gérant créé id=%s", gerant.id)
        return gerant

    async def update_gerant(self, db: AsyncSession, gerant_id: int, payload) -> Gerant:
        gerant = await self.get_gerant(db, gerant_id)
        data = payload.model_dump(exclude_unset=True)
        throw_if_invalid(validate_gerant(data))
        await self._check_unique(db, data, current=gerant)

        try:
            return await repo.update(db, gerant, data)
        except IntegrityError:
            raise AlreadyExistsError("Un gérant avec ce CINE ou cet email existe déjà")

    async def delete_gerant(self, db: AsyncSession, gerant_id: int) -> None:
        gerant = await self.get_gerant(db, gerant_id)
        if await repo.count_paiements(db, gerant_id):
            raise ConflictError(
                "Impossible de supprimer un gérant dont les responsables ont encaissé des paiements"
            )
        await repo.delete(db, gerant)
        logger.info("Gérant supprimé id=%s", gerant_id)

    async def _check_unique(
        self, db: AsyncSession, data: Dict[str, Any], current: Optional[Gerant] = None
    ) -> None:
        cine = data.get("cine")
        if cine and (current is None or cine != current.cine):
            if await repo.cine_exists(db, cine, exclude_id=current.id if current else None):
                raise AlreadyExistsError(MSG_CINE_TAKEN, field="cine")

        email = data.get("email")
        if email and (current is None or email != current.email):
            if await repo.email_exists(db, email, exclude_id=current.id if current else None):
                raise AlreadyExistsError(MSG_EMAIL_TAKEN, field="email")

    # ── Import en masse ───────────────────────────────────────

    async def bulk_import(self, db: AsyncSession, records: Sequence[Any]) -> Dict:
        """
        Ligne par ligne : une ligne invalide est rapportée et n'empêche pas
        les autres ; un CINE ou un email déjà connu compte comme ignoré.
        """
        errors: List[Dict] = []
        imported = skipped = 0
        seen_cines, seen_emails = set(), set()

        for line, record in enumerate(records, start=1):
            data = record.model_dump(exclude_unset=True) if hasattr(record, "model_dump") else dict(record)
            data = {key: data.get(key) for key in GERANT_FIELDS}

            missing = [key for key in GERANT_FIELDS if not data[key]]
            if missing:
                errors.append({
                    "message": f"Champs manquants : {', '.join(missing)}",
                    "code": "MISSING_FIELDS",
                    "field": missing[0],
                    "line": line,
                })
                continue

            result = validate_gerant(data)
            if not result.is_valid:
                for field, message in result.errors.items():
                    errors.append({
                        "message": message, "code": "VALIDATION_ERROR",
                        "field": field, "line": line,
                    })
                continue

            if (
                data["cine"] in seen_cines
                or data["email"] in seen_emails
                or await repo.cine_exists(db, data["cine"])
                or await repo.email_exists(db, data["email"])
            ):
                skipped += 1
                continue

            try:
                await repo.insert_in_savepoint(db, data)
            except SQLAlchemyError as exc:
                logger.warning("Insertion du gérant ligne %d refusée : %s", line, exc)
                errors.append({
                    "message": f"Échec de la création du gérant : {exc}",
                    "code": "INSERT_ERROR",
                    "line": line,
                })
                continue
            seen_cines.add(data["cine"])
            seen_emails.add(data["email"])
            imported += 1

        await repo.commit(db)
        logger.info("Import gérants : %d importés, %d ignorés, %d erreurs", imported, skipped, len(errors))
        return {
            "total": len(records),
            "imported": imported,
            "skipped": skipped,
            "errors": errors,
        }
