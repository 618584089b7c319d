# app/modules/paiement/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.shared.schemas import ORMModel


class PaiementCreateIn(BaseModel):
    periode_id:     int
    responsable_id: int
    montant:        float = Field(..., gt=0)
    date_paiement:  Optional[datetime] = None     # défaut : maintenant


class PaiementOut(ORMModel):
    id: int
    periode_id: int
    responsable_id: int
    montant: float
    date_paiement: datetime
    created_at: Optional[datetime] = None


class SummaryPeriodeOut(BaseModel):
    annee: int
    mois: int


class PaiementSummaryOut(BaseModel):
    total_montant: float
    count: int
    periode: SummaryPeriodeOut
