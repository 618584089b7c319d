# app/client/importer.py
"""
Import d'un classeur Excel de barques, de bout en bout :
    lecture (import_reader) → gérant par défaut → POST /api/barques/bulk
    → message de synthèse pour l'utilisateur

Le résultat (ImportOutcome) porte le titre et les lignes du message
affiché ; aucune exception ne sort de import_file() pour un fichier
rejeté ou un import refusé.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.client.api import ApiError, GestMarineAPI
from app.client.import_reader import ImportFileError, Source, read_barques, to_creation_records
from app.client.stores.barque import BarqueStore

logger = logging.getLogger(__name__)


@dataclass
class ImportOutcome:
    success: bool
    title: str
    messages: List[str] = field(default_factory=list)
    result: Optional[Dict[str, Any]] = None


def format_import_error(error: Dict[str, Any]) -> str:
    """'message (ligne n) - Champ: f' ; ligne et champ seulement s'ils sont connus."""
    text = error.get("message", "")
    if error.get("line"):
        text += f" (ligne {error['line']})"
    if error.get("field"):
        text += f" - Champ: {error['field']}"
    return text


class BarqueImporter:

    def __init__(self, api: GestMarineAPI, store: Optional[BarqueStore] = None):
        self.api = api
        self.store = store

    async def import_file(self, source: Source) -> ImportOutcome:
        try:
            records = to_creation_records(read_barques(source))
        except ImportFileError as exc:
            logger.warning("Fichier rejeté : %s", exc)
            return ImportOutcome(False, "Erreur de lecture", [str(exc)])

        try:
            await self.api.init_default_gerant()
            if self.store is not None:
                result = await self.store.bulk_import(records)
            else:
                result = await self.api.bulk_import_barques(records)
        except ApiError as exc:
            logger.warning("Import refusé par le serveur : %s", exc.message)
            return ImportOutcome(False, "Erreur d'import", [exc.message])

        if not result.get("success"):
            errors = result.get("errors") or []
            messages = [format_import_error(e) for e in errors] or [result.get("error") or ""]
            return ImportOutcome(False, "Erreur de validation", messages, result)

        return ImportOutcome(
            True,
            "Import réussi",
            [f"{result['imported']} barques importées, {result['skipped']} ignorées."],
            result,
        )
