# app/shared/models/Barque.py
"""
Modèle Barque (immatriculation d'un bateau de pêche).

Invariant : immatriculation unique sur toute la table.
Une barque appartient au plus à un gérant (FK nullable) et peut être
confiée à un responsable de ce gérant.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.shared.enums import BarqueStatut


class Barque(Base):
    __tablename__ = "barques"

    id              = Column(Integer, primary_key=True, index=True)
    nom             = Column(String, nullable=False)
    immatriculation = Column(String, unique=True, index=True, nullable=False)
    port_attache    = Column(String, nullable=False)
    affiliation     = Column(String, nullable=False, default="")

    statut = Column(
        SAEnum(BarqueStatut, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BarqueStatut.INACTIF,
    )

    gerant_id      = Column(Integer, ForeignKey("gerants.id", ondelete="SET NULL"), nullable=True, index=True)
    responsable_id = Column(Integer, ForeignKey("responsables.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # ── Relations ────────────────────────────────────────────
    gerant      = relationship("Gerant", back_populates="barques")
    responsable = relationship("Responsable", back_populates="barques")
    periodes    = relationship("Periode", back_populates="barque", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Barque id={self.id} immatriculation={self.immatriculation}>"
