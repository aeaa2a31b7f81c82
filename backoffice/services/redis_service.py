# backoffice/services/redis_service.py
from typing import Optional

import redis.asyncio as redis  # Using asyncio version for FastAPI

from backoffice.core.config import settings
from backoffice.core.logging import logger


class RedisClient:
    def __init__(self, host: str = settings.REDIS_HOST, port: int = settings.REDIS_PORT):
        self.host = host
        self.port = port
        self._client: Optional[redis.Redis] = None

    async def connect(self):
        if not self._client:
            try:
                client = redis.Redis(host=self.host, port=self.port, decode_responses=True)
                # Test connection
                await client.ping()
                self._client = client
                logger.info(f"Conectado ao Redis em {self.host}:{self.port}")
            except (redis.ConnectionError, redis.TimeoutError, OSError) as e:
                logger.warning(f"Falha ao conectar ao Redis: {e}")
                self._client = None  # Ensure client is None if connection failed

    async def disconnect(self):
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Desconectado do Redis.")

    @property
    async def client(self) -> Optional[redis.Redis]:
        if not self._client:
            await self.connect()  # Attempt to connect if not already connected
        return self._client

    async def publish_message(self, channel: str, message: str) -> bool:
        r = await self.client
        if not r:
            logger.warning(f"Não foi possível publicar no canal \"{channel}\": cliente Redis não conectado.")
            return False
        try:
            await r.publish(channel, message)
        except redis.RedisError as e:
            logger.warning(f"Falha ao publicar no canal \"{channel}\": {e}")
            return False
        logger.debug(f"Mensagem publicada no canal \"{channel}\"")
        return True

    async def subscribe_to_channel(self, channel: str):
        r = await self.client
        if r:
            pubsub = r.pubsub()
            await pubsub.subscribe(channel)
            logger.info(f"Inscrito no canal \"{channel}\"")
            return pubsub
        logger.warning("Não foi possível inscrever-se no canal: cliente Redis não conectado.")
        return None


# Instância global para ser usada na aplicação
redis_client = RedisClient()


# Funções para serem chamadas no startup e shutdown da aplicação FastAPI
async def startup_redis_client():
    await redis_client.connect()


async def shutdown_redis_client():
    await redis_client.disconnect()
