# app/shared/models/__init__.py
"""
Point d'entrée unique pour tous les modèles SQLAlchemy.

TOUJOURS importer les modèles depuis ce fichier :
  from app.shared.models import Barque, Gerant, Periode, ...

→ Garantit que tous les modèles sont enregistrés dans Base.metadata
  avant la création des tables (init_models / create_all).
"""

from app.shared.models.Gerant      import Gerant, Responsable
from app.shared.models.Barque      import Barque
from app.shared.models.Facturation import Tarif, Periode, Paiement

__all__ = [
    # Gérant
    "Gerant", "Responsable",
    # Barque
    "Barque",
    # Facturation
    "Tarif",
    "Periode",
    "Paiement",
]
