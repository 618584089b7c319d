# main.py
"""
Point d'entrée de l'API GestMarine.
Enregistre tous les modules via leurs routers.

Architecture : modules verticaux (router → service → repository)
+ engine transversal (validation, rapports) sans accès DB.
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.database import init_models
from app.core.errors import register_exception_handlers

from app.modules.barque.router      import router as barque_router
from app.modules.gerant.router      import router as gerant_router
from app.modules.responsable.router import router as responsable_router
from app.modules.tarif.router       import router as tarif_router
from app.modules.periode.router     import router as periode_router
from app.modules.paiement.router    import router as paiement_router
from app.modules.rapport.router     import router as rapport_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await init_models()
        logger.info("Tables vérifiées")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s → %s (%.0f ms)",
        request.method, request.url.path, response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


register_exception_handlers(app)

app.include_router(barque_router)
app.include_router(gerant_router)
app.include_router(responsable_router)
app.include_router(tarif_router)
app.include_router(periode_router)
app.include_router(paiement_router)
app.include_router(rapport_router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": settings.VERSION}
