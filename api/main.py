"""
API HTTP principal para chef-ai-core.

Esta aplicación FastAPI expone endpoints REST que usan el core interno
(chef_ai_core) para generar recetas tamiles, conversar con el asistente
de cocina y editar imágenes.

Uso:
    uvicorn api.main:app --reload --port 8000
"""

import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import catalog, chat, image_edits, recipes

# Cargar variables de entorno
load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Configurar logging
log_level = getattr(logging, LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)
logger.info("🚀 Iniciando Chef AI Core API")

app = FastAPI(
    title="Chef AI Core API",
    description="API del asistente de cocina tamil: recetas, chat y edición de imágenes",
    version="0.1.0",
)

# CORS: orígenes permitidos desde CORS_ORIGINS
cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
cors_origins = [origin.strip() for origin in cors_origins_str.split(",") if origin.strip()]

logger.info(f"🌐 CORS origins configurados: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Registrar rutas
app.include_router(catalog.router)
app.include_router(recipes.router)
app.include_router(chat.router)
app.include_router(image_edits.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "chef-ai-core-api"}


@app.get("/health")
async def health():
    """Health check detallado."""
    return {
        "status": "ok",
        "service": "chef-ai-core-api",
        "version": "0.1.0",
    }
