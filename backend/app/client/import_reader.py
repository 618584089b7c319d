# app/client/import_reader.py
"""
Lecture d'un classeur Excel de barques.

Colonnes attendues (ligne 1, casse ignorée) :
    Affiliation | Immatriculation | Nom de barque | Port d'Attache

Le nom et le port sont repérés par la PREMIÈRE colonne dont l'en-tête
contient "nom" / "port" : avec "Nom propriétaire" placé avant
"Nom de barque", c'est le propriétaire qui est lu.

Utilisé par le client (BarqueImporter) et par POST /api/barques/import.
"""
import logging
from datetime import date, datetime
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

from openpyxl import load_workbook

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("Affiliation", "Immatriculation", "Nom de barque", "Port d'Attache")

Source = Union[str, Path, bytes, BinaryIO]


class ImportFileError(ValueError):
    """Fichier rejeté avant tout envoi au serveur."""


def _open_workbook(source: Source):
    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(source)
    try:
        return load_workbook(source, read_only=True, data_only=True)
    except Exception as exc:
        raise ImportFileError(f"Fichier illisible : {exc}") from exc


def cell_text(value: Any) -> str:
    """Valeur de cellule → texte nettoyé ("" pour une cellule vide)."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def _header_index(header_row) -> Dict[str, int]:
    # en cas de doublon, la dernière colonne l'emporte
    headers: Dict[str, int] = {}
    for index, value in enumerate(header_row):
        if isinstance(value, str) and value.strip():
            headers[value.strip()] = index
    return headers


def _exact(headers: Dict[str, int], name: str) -> Optional[int]:
    for header, index in headers.items():
        if header.lower() == name.lower():
            return index
    return None


def _containing(headers: Dict[str, int], fragment: str) -> Optional[int]:
    candidates = [index for header, index in headers.items() if fragment in header.lower()]
    return min(candidates) if candidates else None


def _cell(row, index: Optional[int]) -> str:
    if index is None or index >= len(row):
        return ""
    return cell_text(row[index])


def read_barques(source: Source) -> List[Dict[str, str]]:
    """
    Lignes brutes du premier onglet : {nom, immatriculation, port_attache,
    affiliation}. Les lignes entièrement vides sont ignorées.
    """
    wb = _open_workbook(source)
    try:
        if not wb.worksheets:
            raise ImportFileError("Aucune feuille trouvée dans le fichier Excel")
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)

        header_row = next(rows, None) or ()
        headers = _header_index(header_row)

        missing = [name for name in REQUIRED_COLUMNS if _exact(headers, name) is None]
        if missing:
            raise ImportFileError(f"Colonnes manquantes: {', '.join(missing)}")

        columns = {
            "nom": _containing(headers, "nom"),
            "immatriculation": _exact(headers, "Immatriculation"),
            "port_attache": _containing(headers, "port"),
            "affiliation": _exact(headers, "Affiliation"),
        }

        records: List[Dict[str, str]] = []
        for row in rows:
            record = {key: _cell(row, index) for key, index in columns.items()}
            if any(record.values()):
                records.append(record)
    finally:
        wb.close()

    if not records:
        raise ImportFileError("Aucune donnée trouvée dans le fichier")
    logger.info("%d lignes lues dans le classeur", len(records))
    return records


def to_creation_records(rows: List[Dict[str, str]]) -> List[Dict[str, str]]:
    """
    Lignes lues → corps de POST /api/barques/bulk (camelCase).
    Une ligne sans nom, immatriculation ou port est écartée.
    """
    records: List[Dict[str, str]] = []
    for line, row in enumerate(rows, start=2):
        if not (row.get("nom") and row.get("immatriculation") and row.get("port_attache")):
            logger.warning("Ligne %d incomplète ignorée : %s", line, row)
            continue
        records.append({
            "nom": row["nom"],
            "immatriculation": row["immatriculation"],
            "portAttache": row["port_attache"],
            "affiliation": row.get("affiliation", ""),
            "statut": "actif",
        })

    if not records:
        raise ImportFileError(
            "Aucune barque valide à importer. Vérifiez que les colonnes Nom de barque, "
            "Immatriculation et Port d'Attache sont renseignées."
        )
    return records
