from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backoffice.core.config import settings
from backoffice.core.logging import logger
from backoffice.api.errors import register_exception_handlers
from backoffice.api.v1.router import api_router_v1
from backoffice.database import engine
from backoffice.db import models  # noqa: F401 (registra as tabelas no metadata)
from backoffice.db.base_class import Base
from backoffice.services.redis_service import startup_redis_client, shutdown_redis_client

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Back-office do restaurante - pedidos, reservas, aprovações da equipe e chat com o agente",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    contact={
        "name": "Suporte Técnico",
        "email": settings.SUPPORT_EMAIL,
    },
)

# Configuração de CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

# Criar tabelas automaticamente apenas em desenvolvimento.
# Em produção, use migrações com Alembic
if settings.ENVIRONMENT == "development":
    @app.on_event("startup")
    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tabelas criadas com sucesso (apenas em desenvolvimento)")


@app.on_event("startup")
async def connect_redis():
    await startup_redis_client()


@app.on_event("shutdown")
async def disconnect_redis():
    await shutdown_redis_client()


# Inclui todas as rotas da API V1
app.include_router(api_router_v1, prefix=settings.API_V1_STR)


@app.get("/", tags=["Root"])
async def read_root():
    return {
        "message": f"Bem-vindo à API {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}",
        "docs": "/docs",
        "status": "operacional",
        "environment": settings.ENVIRONMENT,
    }


@app.get("/health", tags=["Health Check"])
async def health_check():
    """Endpoint para verificação de saúde da API"""
    return {
        "status": "healthy",
        "database": "connected" if settings.DATABASE_URL else "disconnected",
        "environment": settings.ENVIRONMENT,
    }
