# engine/reporting/rapport.py
"""
Rapport de recouvrement d'un gérant : fonctions pures, sans DB.

Entrées (objets ORM ou SimpleNamespace) :
    barques    : id, immatriculation
    periodes   : id, barque_id, annee, mois, montant, statut
    paiements  : periode_id, montant, date_paiement

Architecture :
    rapport/service.get_rapport()
        → RapportRepository.load()     → barques, périodes, paiements
        → build_rapport(...)           → dict {sommaire, barques, graphData}

Une période est EN RETARD si son statut est En_Retard, ou si elle est
encore En_Attente alors que son mois est terminé (date de référence :
today). Une période Paye ne l'est jamais.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.shared.enums import PeriodeStatut, StatutPaiement

DEFAULT_MONTHS = 12


# ── Plage de dates ────────────────────────────────────────────────────────────

def default_range(today: date, months: int = DEFAULT_MONTHS) -> Tuple[date, date]:
    """Les `months` derniers mois, mois courant inclus."""
    index = today.year * 12 + (today.month - 1) - (months - 1)
    return date(index // 12, index % 12 + 1, 1), today


def month_keys(debut: date, fin: date) -> List[Tuple[int, int]]:
    keys = []
    annee, mois = debut.year, debut.month
    while (annee, mois) <= (fin.year, fin.month):
        keys.append((annee, mois))
        annee, mois = (annee + 1, 1) if mois == 12 else (annee, mois + 1)
    return keys


def month_end(annee: int, mois: int) -> date:
    return date(annee, mois, calendar.monthrange(annee, mois)[1])


def is_late(periode: Any, today: date) -> bool:
    statut = PeriodeStatut(periode.statut)
    if statut == PeriodeStatut.EN_RETARD:
        return True
    return statut == PeriodeStatut.EN_ATTENTE and month_end(periode.annee, periode.mois) < today


# ── Résultat ──────────────────────────────────────────────────────────────────

@dataclass
class BarqueLine:
    barque_id:        int
    reference:        str
    total_paiements:  Decimal = Decimal("0")
    nombre_retards:   int = 0
    dernier_paiement: Optional[datetime] = None

    def to_dict(self) -> Dict:
        return {
            "barque_id": self.barque_id,
            "reference": self.reference,
            "total_paiements": float(self.total_paiements),
            "nombre_retards": self.nombre_retards,
            "dernier_paiement": self.dernier_paiement.isoformat() if self.dernier_paiement else None,
            "statut_paiement": (
                StatutPaiement.EN_RETARD if self.nombre_retards else StatutPaiement.A_JOUR
            ).value,
        }


@dataclass
class MonthPoint:
    paiements: Decimal = Decimal("0")
    retards:   int = 0


@dataclass
class _Totals:
    montant:   Decimal = Decimal("0")
    paye:      Decimal = Decimal("0")
    paiements: int = 0
    retards:   int = 0
    months:    Dict[Tuple[int, int], MonthPoint] = field(default_factory=dict)


def _dec(value: Any) -> Decimal:
    return Decimal(str(value or 0))


def build_rapport(
    barques: Iterable[Any],
    periodes: Iterable[Any],
    paiements: Iterable[Any],
    debut: date,
    fin: date,
    today: Optional[date] = None,
) -> Dict:
    """
    Agrège les périodes dont le mois tombe dans [debut, fin] et les
    paiements qui leur sont rattachés.
    """
    today = today or date.today()
    keys = month_keys(debut, fin)
    in_range = set(keys)

    lines = {b.id: BarqueLine(barque_id=b.id, reference=b.immatriculation) for b in barques}
    totals = _Totals(months={key: MonthPoint() for key in keys})

    kept = {}
    for periode in periodes:
        key = (periode.annee, periode.mois)
        if key not in in_range or periode.barque_id not in lines:
            continue
        kept[periode.id] = periode
        totals.montant += _dec(periode.montant)
        if is_late(periode, today):
            totals.retards += 1
            totals.months[key].retards += 1
            lines[periode.barque_id].nombre_retards += 1

    for paiement in paiements:
        periode = kept.get(paiement.periode_id)
        if periode is None:
            continue
        montant = _dec(paiement.montant)
        totals.paye += montant
        totals.paiements += 1
        totals.months[(periode.annee, periode.mois)].paiements += montant

        line = lines[periode.barque_id]
        line.total_paiements += montant
        if line.dernier_paiement is None or paiement.date_paiement > line.dernier_paiement:
            line.dernier_paiement = paiement.date_paiement

    taux = (
        min(float(totals.paye / totals.montant * 100), 100.0)
        if totals.montant > 0 else 0.0
    )

    return {
        "sommaire": {
            "total_montant": float(totals.montant),
            "total_paye": float(totals.paye),
            "total_impaye": float(max(totals.montant - totals.paye, Decimal("0"))),
            "nombre_paiements": totals.paiements,
            "nombre_retards": totals.retards,
            "taux_recouvrement": round(taux, 2),
            "periode": {"debut": debut.isoformat(), "fin": fin.isoformat()},
        },
        "barques": [line.to_dict() for line in lines.values()],
        "graphData": {
            "labels": [f"{annee}-{mois:02d}" for annee, mois in keys],
            "paiements": [float(totals.months[key].paiements) for key in keys],
            "retards": [totals.months[key].retards for key in keys],
        },
    }
