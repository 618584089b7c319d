# app/modules/responsable/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.shared.schemas import ORMModel


class ResponsableCreateIn(BaseModel):
    nom:         str = Field(..., min_length=2, max_length=50)
    identifiant: str = Field(..., min_length=1)


class ResponsableUpdateIn(BaseModel):
    nom:   Optional[str] = Field(None, min_length=2, max_length=50)
    actif: Optional[bool] = None


class ResponsableOut(ORMModel):
    id: int
    gerant_id: int
    nom: str
    identifiant: str
    actif: bool
    created_at: Optional[datetime] = None


class AssignBarqueIn(BaseModel):
    barque_id: int
