# app/modules/tarif/schemas.py
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime

from app.shared.enums import TarifType
from app.shared.schemas import ORMModel


class TarifCreateIn(BaseModel):
    type:        TarifType
    montant:     float = Field(..., ge=0)
    description: str = ""
    date_debut:  date
    date_fin:    Optional[date] = None

    @model_validator(mode="after")
    def _check_dates(self):
        if self.date_fin is not None and self.date_fin < self.date_debut:
            raise ValueError("La date de fin doit être postérieure à la date de début")
        return self


class TarifUpdateIn(BaseModel):
    montant:     Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    actif:       Optional[bool] = None
    date_fin:    Optional[date] = None


class TarifOut(ORMModel):
    id: int
    gerant_id: int
    type: TarifType
    montant: float
    description: str
    actif: bool
    date_debut: date
    date_fin: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
