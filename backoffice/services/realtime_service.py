# backoffice/services/realtime_service.py
"""Feed de alterações de linha (INSERT/UPDATE/DELETE) por tabela.

Cada escrita confirmada publica um evento no canal ``realtime:<tabela>``;
o painel assina o canal via SSE (um stream por tela aberta).
"""
import json
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from backoffice.core.logging import logger
from backoffice.services.redis_service import RedisClient, redis_client

TABLES = ("orders", "reservations", "reservation_approvals")


def channel_for(table: str) -> str:
    return f"realtime:{table}"


class RealtimeFeed:
    def __init__(self, client: RedisClient = redis_client, poll_timeout: float = 1.0):
        self.client = client
        self.poll_timeout = poll_timeout

    async def publish(self, table: str, event: str, new: Optional[dict] = None, old: Optional[dict] = None) -> bool:
        payload = {
            "event": event,
            "table": table,
            "new": new,
            "old": old,
            "commit_timestamp": datetime.now(timezone.utc).isoformat(),
        }
        ok = await self.client.publish_message(channel_for(table), json.dumps(payload))
        if not ok:
            logger.warning(f"Evento {event} em {table} não publicado no feed realtime")
        return ok

    async def subscribe(self, table: str):
        """Retorna o pubsub inscrito no canal da tabela, ou None se o Redis estiver indisponível."""
        return await self.client.subscribe_to_channel(channel_for(table))

    async def events(self, pubsub) -> AsyncIterator[Optional[str]]:
        """Itera os eventos recebidos; produz None a cada intervalo sem mensagens."""
        while True:
            message = await pubsub.get_message(ignore_subscribe_messages=True, timeout=self.poll_timeout)
            if message is None:
                yield None
                continue
            if message.get("type") == "message":
                yield message["data"]

    async def unsubscribe(self, pubsub, table: str):
        await pubsub.unsubscribe(channel_for(table))
        await pubsub.aclose()
        logger.info(f"Assinatura realtime de {table} encerrada")


realtime_feed = RealtimeFeed()
