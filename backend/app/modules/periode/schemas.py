# app/modules/periode/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.shared.enums import PeriodeStatut
from app.shared.schemas import ORMModel


class PeriodeCreateIn(BaseModel):
    barque_id: int
    annee:     int = Field(..., ge=2000, le=2100)
    mois:      int = Field(..., ge=1, le=12)
    montant:   float = Field(..., ge=0)


class PeriodeUpdateIn(BaseModel):
    montant: Optional[float] = Field(None, ge=0)
    statut:  Optional[PeriodeStatut] = None


class PeriodeOut(ORMModel):
    id: int
    barque_id: int
    annee: int
    mois: int
    montant: float
    statut: PeriodeStatut
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PeriodeGenerateIn(BaseModel):
    barque_ids: List[int] = Field(..., min_length=1)
    annee:      int = Field(..., ge=2000, le=2100)
    mois:       int = Field(..., ge=1, le=12)


class PeriodeGenerateOut(BaseModel):
    created: List[PeriodeOut]
    skipped: int
