# tests/conftest.py
"""
Fixtures et factories partagées sur l'ensemble de la suite de tests.

Quatre couches :
    1. Engine     : fonctions pures, aucun mock nécessaire
    2. Service    : mocks AsyncSession + repos via pytest-mock
    3. Router     : httpx.AsyncClient + dependency_overrides FastAPI
    4. Repository : vraie base SQLite en mémoire (db_session / db_client)
"""
import pytest
from io import BytesIO
from types import SimpleNamespace
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport
from openpyxl import Workbook
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.database import Base, enable_sqlite_savepoints, get_db
from app.shared.deps import get_gerant_or_404
from app.shared.enums import BarqueStatut, PeriodeStatut, TarifType


# ── Factories de modèles ORM (SimpleNamespace : léger, sans ORM) ──────────────

def make_gerant(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "nom": "Alaoui",
        "prenom": "Karim",
        "cine": "AB123456",
        "telephone": "0612345678",
        "email": "karim@example.ma",
        "password": "secret123",
        "created_at": datetime(2025, 1, 1),
        "updated_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_barque(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "nom": "Ma Barque",
        "immatriculation": "12/3-4567",
        "port_attache": "12/3",
        "affiliation": "Pêche Côtière",
        "statut": BarqueStatut.ACTIF,
        "gerant_id": 1,
        "responsable_id": None,
        "gerant": None,
        "created_at": datetime(2025, 1, 1),
        "updated_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_responsable(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "gerant_id": 1,
        "nom": "Said",
        "identifiant": "RESP-01",
        "actif": True,
        "created_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_tarif(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "gerant_id": 1,
        "type": TarifType.MENSUEL,
        "montant": 150.0,
        "description": "Redevance mensuelle",
        "actif": True,
        "date_debut": date(2025, 1, 1),
        "date_fin": None,
        "created_at": datetime(2025, 1, 1),
        "updated_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_periode(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "barque_id": 1,
        "annee": 2025,
        "mois": 3,
        "montant": 150.0,
        "statut": PeriodeStatut.EN_ATTENTE,
        "created_at": datetime(2025, 3, 1),
        "updated_at": datetime(2025, 3, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_paiement(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "periode_id": 1,
        "responsable_id": 1,
        "montant": 150.0,
        "date_paiement": datetime(2025, 3, 10, 9, 30),
        "created_at": datetime(2025, 3, 10, 9, 30),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_payload(**fields) -> SimpleNamespace:
    """Simule un schéma *In : attributs + model_dump(exclude_unset=...)."""
    ns = SimpleNamespace(**fields)
    ns.model_dump = lambda exclude_unset=False, exclude_none=False: {
        k: v for k, v in fields.items() if not (exclude_none and v is None)
    }
    return ns


# ── Classeur Excel en mémoire ─────────────────────────────────────────────────

BARQUE_HEADERS = ["Affiliation", "Immatriculation", "Nom de barque", "Port d'Attache"]


def make_xlsx(rows, headers=None, empty=False) -> bytes:
    """Classeur d'une feuille : en-têtes en ligne 1 puis `rows`."""
    wb = Workbook()
    ws = wb.active
    if not empty:
        ws.append(list(headers if headers is not None else BARQUE_HEADERS))
        for row in rows:
            ws.append(list(row))
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


# ── DB mock factory ───────────────────────────────────────────────────────────

def make_async_db() -> AsyncMock:
    """
    AsyncMock simulant une AsyncSession SQLAlchemy.
    Fournit une side_effect sur refresh() pour simuler le SET d'ID par le DB.
    """
    db = AsyncMock(spec=AsyncSession)
    db.add = MagicMock()
    db.add_all = MagicMock()

    async def refresh_side_effect(obj):
        if not getattr(obj, "id", None):
            obj.id = 1

    db.refresh = AsyncMock(side_effect=refresh_side_effect)
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


# ── Fixtures HTTP (httpx.AsyncClient + dependency_overrides) ─────────────────

@pytest.fixture
async def client():
    """Client avec session mockée : les tests mockent le service entier."""
    mock_db = AsyncMock(spec=AsyncSession)
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def gerant_client():
    """Client dont le gérant du chemin (/api/gerants/{id}/...) existe."""
    mock_db = AsyncMock(spec=AsyncSession)
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_gerant_or_404] = lambda: make_gerant()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def raw_client():
    """Comme client, mais une exception non gérée donne un 500 au lieu de remonter."""
    mock_db = AsyncMock(spec=AsyncSession)
    app.dependency_overrides[get_db] = lambda: mock_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


# ── Fixtures SQLite en mémoire ────────────────────────────────────────────────

@pytest.fixture
async def db_engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, expire_on_commit=False, class_=AsyncSession)
    async with factory() as session:
        yield session


@pytest.fixture
async def db_client(db_engine):
    """API complète branchée sur la base en mémoire (une session par requête)."""
    factory = async_sessionmaker(db_engine, expire_on_commit=False, class_=AsyncSession)

    async def _get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
