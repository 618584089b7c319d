# app/modules/barque/schemas.py
"""
Les formats (immatriculation, port) ne sont PAS contrôlés ici :
engine/validation/barque.py s'en charge avec des messages métier.
Pydantic ne vérifie que la présence et le type.
"""
from pydantic import ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from app.shared.enums import BarqueStatut
from app.shared.schemas import CamelModel


# ── Barque CRUD ────────────────────────────────────────────

class BarqueCreateIn(CamelModel):
    nom: str
    immatriculation: str
    port_attache: str
    affiliation: str
    statut: Optional[str] = None          # défaut "inactif" côté service
    gerant_id: Optional[int] = None
    responsable_id: Optional[int] = None


class BarqueUpdateIn(CamelModel):
    nom: Optional[str] = None
    immatriculation: Optional[str] = None
    port_attache: Optional[str] = None
    affiliation: Optional[str] = None
    statut: Optional[str] = None
    gerant_id: Optional[int] = None
    responsable_id: Optional[int] = None


class GerantSummaryOut(CamelModel):
    id: int
    nom: str
    prenom: str
    email: str
    telephone: Optional[str] = None
    role: str = "GERANT"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BarqueOut(CamelModel):
    id: int
    nom: str
    immatriculation: str
    port_attache: str
    affiliation: str
    statut: BarqueStatut
    gerant_id: Optional[int] = None
    responsable_id: Optional[int] = None
    gerant: Optional[GerantSummaryOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BarquePageOut(CamelModel):
    items: List[BarqueOut]
    total: int
    total_pages: int
    current_page: int


# ── Import en masse ────────────────────────────────────────

class BarqueImportIn(CamelModel):
    """
    Ligne candidate à l'import : tout est optionnel, la validation
    produit des erreurs par ligne au lieu d'un 422 global.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    nom: Optional[str] = None
    immatriculation: Optional[str] = None
    port_attache: Optional[str] = None
    affiliation: Optional[str] = None
    statut: Optional[str] = None


class ImportErrorOut(CamelModel):
    message: str
    immatriculation: Optional[str] = None
    line: Optional[int] = None
    field: Optional[str] = None
    code: Optional[str] = None


class ImportResultOut(CamelModel):
    success: bool
    total: int
    imported: int
    skipped: int
    errors: List[ImportErrorOut] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class InitDefaultGerantOut(CamelModel):
    success: bool
    gerant: GerantSummaryOut
