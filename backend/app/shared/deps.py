# app/shared/deps.py
"""
Dépendances FastAPI réutilisables dans tous les routers.
Injectées via Depends() : jamais appelées directement.

Pas d'authentification : les routes d'un gérant prennent son id dans le
chemin (/api/gerants/{gerant_id}/...) et GerantDep le résout.
"""
from typing import Annotated

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.errors import NotFoundError
from app.shared.models import Gerant


async def get_gerant_or_404(
    gerant_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Gerant:
    """Gérant désigné par le chemin, ou 404."""
    result = await db.execute(select(Gerant).where(Gerant.id == gerant_id))
    gerant = result.scalar_one_or_none()
    if not gerant:
        raise NotFoundError("Gérant non trouvé")
    return gerant


# ── Type aliases pour les routers ─────────────────────────
DbDep     = Annotated[AsyncSession, Depends(get_db)]
GerantDep = Annotated[Gerant, Depends(get_gerant_or_404)]
