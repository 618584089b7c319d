# app/shared/enums.py
"""
Toutes les énumérations du projet GestMarine.

Source unique de vérité pour les statuts et types.
Importé par les modèles, schemas, services, engine et client.
Les valeurs sont celles échangées en JSON avec le frontend.
"""

from enum import Enum


class BarqueStatut(str, Enum):
    ACTIF          = "actif"
    INACTIF        = "inactif"
    EN_MAINTENANCE = "en_maintenance"
    SUSPENDU       = "suspendu"


class PeriodeStatut(str, Enum):
    EN_ATTENTE = "En_Attente"
    PAYE       = "Paye"
    EN_RETARD  = "En_Retard"


class TarifType(str, Enum):
    MENSUEL     = "Mensuel"
    TRIMESTRIEL = "Trimestriel"
    ANNUEL      = "Annuel"


class StatutPaiement(str, Enum):
    """Statut calculé par barque dans les rapports."""
    A_JOUR    = "A_Jour"
    EN_RETARD = "En_Retard"
