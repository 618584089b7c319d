# app/shared/models/Facturation.py
"""
Modèles de facturation : Tarif, Periode, Paiement.

Periode  : une échéance (année + mois) due par une barque.
           Unique par (barque_id, annee, mois).
Paiement : règlement partiel ou total d'une période, encaissé par un
           responsable. La période passe à "Paye" quand la somme des
           paiements atteint son montant (voir paiement/service.py).
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, Numeric,
    Date, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.shared.enums import PeriodeStatut, TarifType


def _values(enum_cls):
    return [m.value for m in enum_cls]


class Tarif(Base):
    __tablename__ = "tarifs"

    id          = Column(Integer, primary_key=True, index=True)
    gerant_id   = Column(Integer, ForeignKey("gerants.id", ondelete="CASCADE"), nullable=False, index=True)
    type        = Column(SAEnum(TarifType, values_callable=_values), nullable=False)
    montant     = Column(Numeric(10, 2), nullable=False)
    description = Column(String, nullable=False, default="")
    actif       = Column(Boolean, default=True, nullable=False)
    date_debut  = Column(Date, nullable=False)
    date_fin    = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    gerant = relationship("Gerant", back_populates="tarifs")

    def __repr__(self):
        return f"<Tarif id={self.id} type={self.type} montant={self.montant}>"


class Periode(Base):
    __tablename__ = "periodes"
    __table_args__ = (
        UniqueConstraint("barque_id", "annee", "mois", name="uq_periode_barque_mois"),
    )

    id        = Column(Integer, primary_key=True, index=True)
    barque_id = Column(Integer, ForeignKey("barques.id", ondelete="CASCADE"), nullable=False, index=True)
    annee     = Column(Integer, nullable=False)
    mois      = Column(Integer, nullable=False)
    montant   = Column(Numeric(10, 2), nullable=False, default=0)
    statut    = Column(
        SAEnum(PeriodeStatut, values_callable=_values),
        nullable=False,
        default=PeriodeStatut.EN_ATTENTE,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    barque    = relationship("Barque", back_populates="periodes")
    paiements = relationship("Paiement", back_populates="periode", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Periode id={self.id} barque={self.barque_id} {self.annee}-{self.mois:02d}>"


class Paiement(Base):
    __tablename__ = "paiements"

    id             = Column(Integer, primary_key=True, index=True)
    periode_id     = Column(Integer, ForeignKey("periodes.id", ondelete="CASCADE"), nullable=False, index=True)
    responsable_id = Column(Integer, ForeignKey("responsables.id"), nullable=False, index=True)
    montant        = Column(Numeric(10, 2), nullable=False)
    date_paiement  = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    periode     = relationship("Periode", back_populates="paiements")
    responsable = relationship("Responsable", back_populates="paiements")

    def __repr__(self):
        return f"<Paiement id={self.id} periode={self.periode_id} montant={self.montant}>"
