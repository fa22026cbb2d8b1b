import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app_console.gateway import API_BASE_URL, RestGateway
from app_console.routers import consumers, events, sales

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [origem.strip() for origem in os.getenv("CORS_ORIGINS", "*").split(",")]

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)-8s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Um gateway por processo, entregue aos routers via Depends(obter_gateway)
    app.state.gateway = RestGateway(API_BASE_URL)
    logger.info("action: startup | result: success | backend: %s", API_BASE_URL)
    yield


app = FastAPI(
    title="Painel de Vendas de Ingressos",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,  # A interface roda em outra origem
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(events.router, prefix="/api/v1", tags=["Eventos"])
app.include_router(consumers.router, prefix="/api/v1", tags=["Consumidores"])
app.include_router(sales.router, prefix="/api/v1", tags=["Vendas"])


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "Painel de vendas operante!"}
