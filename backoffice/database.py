# backoffice/database.py
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from backoffice.core.config import settings

# Define o motor de banco de dados assíncrono
engine = create_async_engine(settings.DATABASE_URL, echo=True if settings.ENVIRONMENT == "development" else False)

# Cria uma fábrica de sessões assíncronas
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
    class_=AsyncSession
)


# Dependência para obter uma sessão de banco de dados.
# Os commits são explícitos no CRUD: cada escrita é independente (sem transação entre tabelas).
async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
