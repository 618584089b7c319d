# engine/validation/barque.py
"""
Validation des champs d'une barque.

Deux jeux de formats :

    Saisie UI (strict)  immatriculation  ^\\d{1,2}/\\d{1}-\\d{4}$     ex: 10/1-5256
                        port d'attache   ^\\d{1,2}/\\d{1}$           ex: 10/4
    Import (souple)     immatriculation  ^\\d{1,2}/\\d{1,2}(-\\d{4})?$
                        port d'attache   ^\\d{1,2}/\\d{1,2}$

Les fichiers Excel historiques contiennent des immatriculations sans
suffixe et des ports à deux chiffres : l'import les accepte, la saisie non.
"""
from __future__ import annotations

import re
from typing import Any, Dict

from app.engine.validation.common import ValidationResult, as_dict, length_between
from app.shared.enums import BarqueStatut

IMMATRICULATION_REGEX        = re.compile(r"^\d{1,2}/\d{1}-\d{4}$")
PORT_REGEX                   = re.compile(r"^\d{1,2}/\d{1}$")
IMPORT_IMMATRICULATION_REGEX = re.compile(r"^\d{1,2}/\d{1,2}(-\d{4})?$")
IMPORT_PORT_REGEX            = re.compile(r"^\d{1,2}/\d{1,2}$")

STATUTS = {s.value for s in BarqueStatut}

MSG_IMMATRICULATION = "L'immatriculation doit être au format XX/X-XXXX (ex: 10/1-5256)"
MSG_IMPORT_IMMATRICULATION = (
    "Invalid immatriculation format (should be X/X, X/XX, XX/X, or XX/XX "
    "followed by optional -XXXX)"
)
MSG_PORT = "Le port doit être au format XX/X (ex: 10/4)"
MSG_IMPORT_PORT = "Invalid port format (should be X/X, X/XX, XX/X, or XX/XX)"


def _matches(regex: re.Pattern, value: Any) -> bool:
    return isinstance(value, str) and regex.fullmatch(value) is not None


def validate_barque(data: Any, is_import: bool = False) -> ValidationResult:
    """
    Contrôle de forme d'une barque (création ou mise à jour partielle).
    Clés attendues en snake_case : nom, immatriculation, port_attache,
    affiliation, statut, gerant_id, responsable_id.
    """
    record = as_dict(data)
    errors: Dict[str, str] = {}

    if "immatriculation" in record:
        value = record["immatriculation"]
        if is_import:
            if not _matches(IMPORT_IMMATRICULATION_REGEX, (value or "").strip()):
                errors["immatriculation"] = MSG_IMPORT_IMMATRICULATION
        elif not _matches(IMMATRICULATION_REGEX, value):
            errors["immatriculation"] = MSG_IMMATRICULATION

    if "port_attache" in record:
        value = record["port_attache"]
        if is_import:
            value = (value or "").strip()
            if not value:
                errors["port_attache"] = "Le port d'attache ne peut pas être vide"
            elif not _matches(IMPORT_PORT_REGEX, value):
                errors["port_attache"] = MSG_IMPORT_PORT
        elif not _matches(PORT_REGEX, value):
            errors["port_attache"] = MSG_PORT

    if "nom" in record and not length_between(record["nom"], 2, 50):
        errors["nom"] = "Le nom doit contenir entre 2 et 50 caractères"

    if "affiliation" in record and not length_between(record["affiliation"], 2, 100):
        errors["affiliation"] = "L'affiliation doit contenir entre 2 et 100 caractères"

    if "statut" in record:
        statut = record["statut"]
        if isinstance(statut, BarqueStatut):
            statut = statut.value
        if statut not in STATUTS:
            errors["statut"] = "Le statut n'est pas valide"

    # bool est un int en Python : exclu explicitement
    for key, label in (("gerant_id", "du gérant"), ("responsable_id", "du responsable")):
        if key in record and record[key] is not None:
            value = record[key]
            if isinstance(value, bool) or not isinstance(value, int):
                errors[key] = f"L'ID {label} doit être un nombre"

    return ValidationResult.from_errors(errors)


def validate_import_record(data: Any) -> ValidationResult:
    return validate_barque(data, is_import=True)
