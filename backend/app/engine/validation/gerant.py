# engine/validation/gerant.py
"""
Validation des champs d'un gérant.

Forme uniquement. L'unicité du CINE / de l'email demande un aller-retour
DB : elle vit dans GerantRepository.cine_exists / email_exists et n'est
jamais appelée d'ici (testable sans base).
"""
from __future__ import annotations

import re
from typing import Any, Dict

from app.engine.validation.common import ValidationResult, as_dict, length_between

CINE_REGEX     = re.compile(r"^[A-Z]{1,2}[0-9]{5,6}$")
EMAIL_REGEX    = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_REGEX    = re.compile(r"^(?:\+212|0)[5-7][0-9]{8}$")
PASSWORD_REGEX = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d@$!%*#?&]{8,}$")

MSG_PASSWORD = "Le mot de passe doit contenir au moins 8 caractères, une lettre et un chiffre"


def _fullmatch(regex: re.Pattern, value: Any) -> bool:
    # fullmatch : "$" accepterait un "\n" final
    return isinstance(value, str) and regex.fullmatch(value) is not None


def _check_name(value: Any, label: str) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return f"Le {label} est requis"
    if not length_between(value, 2, 50):
        return f"Le {label} doit contenir entre 2 et 50 caractères"
    return None


def validate_gerant(data: Any) -> ValidationResult:
    record = as_dict(data)
    errors: Dict[str, str] = {}

    for key, label in (("nom", "nom"), ("prenom", "prénom")):
        if key in record:
            message = _check_name(record[key], label)
            if message:
                errors[key] = message

    if "cine" in record and not is_valid_cine(record["cine"]):
        errors["cine"] = "Le format du CINE n'est pas valide"

    if "telephone" in record and not _fullmatch(PHONE_REGEX, record["telephone"]):
        errors["telephone"] = "Le format du numéro de téléphone n'est pas valide"

    if "email" in record and not _fullmatch(EMAIL_REGEX, record["email"]):
        errors["email"] = "L'adresse email n'est pas valide"

    if "password" in record and not _fullmatch(PASSWORD_REGEX, record["password"]):
        errors["password"] = MSG_PASSWORD

    return ValidationResult.from_errors(errors)


def validate_password(password: Any) -> ValidationResult:
    errors: Dict[str, str] = {}
    if not _fullmatch(PASSWORD_REGEX, password):
        errors["password"] = MSG_PASSWORD
    return ValidationResult.from_errors(errors)


def is_valid_cine(cine: Any) -> bool:
    return _fullmatch(CINE_REGEX, cine)
