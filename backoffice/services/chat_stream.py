# backoffice/services/chat_stream.py
"""Consumidor do stream de chat de uma reserva, via proxy ``/leaping-ai-proxy``.

Lê quadros ``data: <json>`` linha a linha e acumula as mensagens do bot.
O quadro ``data: [DONE]`` encerra o stream. Qualquer erro apenas marca a
conexão como fechada: não há retry nem recuperação de mensagens parciais.
"""
import codecs
import json
import uuid
from datetime import datetime, timezone
from typing import AsyncIterable, List, Optional

import httpx
from pydantic import ValidationError

from backoffice.core.logging import logger
from backoffice.schemas.chat import ChatMessage, SSEMessage

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class ChatStream:
    def __init__(self, reservation_id: str, relay_url: str, client: Optional[httpx.AsyncClient] = None):
        self.reservation_id = reservation_id
        self.relay_url = relay_url
        # Cliente criado aqui é fechado em aclose(); um cliente recebido fica com quem o passou
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(30.0, read=None))
        self.messages: List[ChatMessage] = []
        self.is_connected = False
        self._closed = False

    def _message(self, sender: str, content: str) -> ChatMessage:
        return ChatMessage(
            id=uuid.uuid4().hex,
            sender=sender,
            content=content,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    async def connect(self) -> None:
        """Abre o stream pelo proxy e consome até [DONE], fim do stream ou erro."""
        payload = {"reservationId": self.reservation_id, "action": "connect"}
        try:
            async with self.client.stream("POST", self.relay_url, json=payload) as response:
                if not response.is_success:
                    raise httpx.HTTPStatusError(
                        f"Connection error: {response.status_code}",
                        request=response.request,
                        response=response,
                    )
                self.is_connected = True
                await self.consume(response.aiter_bytes())
        except Exception as e:
            logger.error(f"Erro na conexão SSE da reserva {self.reservation_id}: {e}")
        finally:
            self.is_connected = False

    async def consume(self, chunks: AsyncIterable[bytes]) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        pending = ""
        async for chunk in chunks:
            if self._closed:
                return
            pending += decoder.decode(chunk)
            *lines, pending = pending.split("\n")
            for line in lines:
                if not self._handle_line(line):
                    return
        pending += decoder.decode(b"", final=True)
        if pending:
            self._handle_line(pending)
        self.is_connected = False

    def _handle_line(self, line: str) -> bool:
        """Processa uma linha; False quando o stream deve parar."""
        line = line.rstrip("\r")
        if not line.startswith(DATA_PREFIX):
            return True
        data = line[len(DATA_PREFIX):]
        if data.strip() == DONE_SENTINEL:
            logger.info(f"Stream da reserva {self.reservation_id} finalizado")
            self.is_connected = False
            return False

        try:
            message = SSEMessage.model_validate(json.loads(data))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Erro ao interpretar mensagem SSE: {e}")
            return True

        if message.type == "chat_message" and message.sender == "bot" and message.content:
            self.messages.append(self._message("bot", message.content))
        elif message.type == "end":
            logger.info(f"Chat da reserva {self.reservation_id} finalizado pelo bot")
        return True

    async def send_message(self, content: str) -> bool:
        payload = {"reservationId": self.reservation_id, "action": "send", "content": content}
        try:
            response = await self.client.post(self.relay_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Erro enviando mensagem da reserva {self.reservation_id}: {e}")
            return False
        self.messages.append(self._message("user", content))
        return True

    def close(self) -> None:
        """Fechar o diálogo: para de ler o stream (a conexão não é abortada)."""
        self._closed = True
        self.is_connected = False

    async def aclose(self) -> None:
        self.close()
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "ChatStream":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
