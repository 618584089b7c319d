# app/shared/models/Gerant.py
"""
Modèles Gérant et Responsable.

Gérant      : propriétaire d'un parc de barques (1 → N barques).
Responsable : superviseur rattaché à un gérant, affecté à des barques.

Note sur password : stocké tel que saisi (comportement historique).
Jamais exposé par les schemas *Out.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class Gerant(Base):
    __tablename__ = "gerants"

    id        = Column(Integer, primary_key=True, index=True)
    nom       = Column(String, nullable=False)
    prenom    = Column(String, nullable=False)
    cine      = Column(String, unique=True, index=True, nullable=False)
    telephone = Column(String, nullable=False)
    email     = Column(String, unique=True, index=True, nullable=False)
    password  = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # ── Relations ────────────────────────────────────────────
    barques      = relationship("Barque", back_populates="gerant")
    responsables = relationship("Responsable", back_populates="gerant", cascade="all, delete-orphan")
    tarifs       = relationship("Tarif", back_populates="gerant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Gerant id={self.id} cine={self.cine}>"


class Responsable(Base):
    __tablename__ = "responsables"
    __table_args__ = (
        UniqueConstraint("gerant_id", "identifiant", name="uq_responsable_identifiant"),
    )

    id          = Column(Integer, primary_key=True, index=True)
    gerant_id   = Column(Integer, ForeignKey("gerants.id", ondelete="CASCADE"), nullable=False, index=True)
    nom         = Column(String, nullable=False)
    identifiant = Column(String, nullable=False)
    actif       = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # ── Relations ────────────────────────────────────────────
    gerant    = relationship("Gerant", back_populates="responsables")
    barques   = relationship("Barque", back_populates="responsable")
    paiements = relationship("Paiement", back_populates="responsable")

    def __repr__(self):
        return f"<Responsable id={self.id} identifiant={self.identifiant}>"
