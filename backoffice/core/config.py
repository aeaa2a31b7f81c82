from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Configurações básicas do projeto
    PROJECT_NAME: str = "Restaurant Back-office"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # Configurações de banco de dados (URL assíncrona, ex: postgresql+asyncpg://...)
    DATABASE_URL: str = Field(...)

    # Configurações opcionais (com valores padrão)
    ENVIRONMENT: str = "development"
    SUPPORT_EMAIL: str = "support@example.com"
    LOG_LEVEL: str = "INFO"
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379

    # Configurações de CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # Agente de conversação (Leaping AI)
    LEAPING_API_URL: Optional[str] = None
    AGENT_SNAPSHOT_ID: Optional[str] = None
    BEARER_TOKEN: Optional[str] = None
    LEAPING_TIMEOUT_SECONDS: float = 30.0

    # Regras de reserva
    MAX_CAPACITY_PER_SLOT: int = 50
    SLOT_WINDOW_MINUTES: int = 30
    OPENING_HOUR: int = 12
    CLOSING_HOUR: int = 23

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignora variáveis extras não declaradas


settings = Settings()
