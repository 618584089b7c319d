# app/modules/rapport/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class RapportPeriodeOut(BaseModel):
    debut: str
    fin: str


class RapportSommaireOut(BaseModel):
    total_montant: float
    total_paye: float
    total_impaye: float
    nombre_paiements: int
    nombre_retards: int
    taux_recouvrement: float
    periode: RapportPeriodeOut


class RapportBarqueOut(BaseModel):
    barque_id: int
    reference: str
    total_paiements: float
    nombre_retards: int
    dernier_paiement: Optional[str] = None
    statut_paiement: str


class GraphDataOut(BaseModel):
    labels: List[str]
    paiements: List[float]
    retards: List[int]


class RapportOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sommaire: RapportSommaireOut
    barques: List[RapportBarqueOut]
    graph_data: GraphDataOut = Field(..., alias="graphData")
