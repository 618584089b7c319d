# engine/validation/common.py
"""
Briques communes aux validateurs de formulaires.

Contrat : un validateur reçoit un enregistrement partiel (dict ou modèle
pydantic) et retourne un ValidationResult. Il ne lève jamais d'exception,
sauf throw_if_invalid() pour les appelants qui préfèrent le style exception.

Seuls les champs PRÉSENTS sont contrôlés : un PATCH qui ne touche que le
statut ne déclenche aucune erreur sur l'immatriculation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping

from app.core.errors import ValidationFailed


@dataclass
class ValidationResult:
    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_errors(cls, errors: Dict[str, str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=errors)


def as_dict(data: Any) -> Dict[str, Any]:
    """dict, Mapping ou BaseModel (champs explicitement fournis uniquement)."""
    if hasattr(data, "model_dump"):
        return data.model_dump(exclude_unset=True)
    if isinstance(data, Mapping):
        return dict(data)
    raise TypeError(f"Enregistrement non supporté : {type(data).__name__}")


def length_between(value: Any, low: int, high: int) -> bool:
    return isinstance(value, str) and low <= len(value) <= high


def validate_import(
    rows: Any, validator: Callable[[Any], ValidationResult]
) -> ValidationResult:
    """
    Valide une liste d'enregistrements.
    Erreurs indexées "ligne_<n>" (1-based), messages joints par ", ".
    """
    if not isinstance(rows, list):
        return ValidationResult.from_errors(
            {"format": "Le fichier d'import doit contenir un tableau de données"}
        )

    errors: Dict[str, str] = {}
    for index, row in enumerate(rows, start=1):
        result = validator(row)
        if not result.is_valid:
            errors[f"ligne_{index}"] = ", ".join(result.errors.values())
    return ValidationResult.from_errors(errors)


def throw_if_invalid(result: ValidationResult) -> None:
    if not result.is_valid:
        raise ValidationFailed(result.errors)
