# app/modules/gerant/schemas.py
"""
Le mot de passe entre (GerantCreateIn / GerantUpdateIn) mais ne sort
jamais : GerantOut n'a pas de champ password.
"""
from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.modules.barque.schemas import BarqueOut
from app.shared.schemas import CamelModel


class GerantCreateIn(CamelModel):
    nom: str
    prenom: str
    cine: str
    telephone: str
    email: str
    password: str


class GerantUpdateIn(CamelModel):
    nom: Optional[str] = None
    prenom: Optional[str] = None
    cine: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class GerantOut(CamelModel):
    id: int
    nom: str
    prenom: str
    cine: str
    telephone: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GerantListOut(CamelModel):
    items: List[GerantOut]
    total: int


class CineCheckOut(CamelModel):
    exists: bool


class GerantBarquesOut(CamelModel):
    items: List[BarqueOut]


# ── Import en masse ────────────────────────────────────────

class GerantImportErrorOut(CamelModel):
    message: str
    code: str
    field: Optional[str] = None
    line: Optional[int] = None


class GerantImportResultOut(CamelModel):
    total: int
    imported: int
    skipped: int
    errors: List[GerantImportErrorOut] = Field(default_factory=list)
