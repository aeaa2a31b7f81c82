# backoffice/services/leaping_service.py
"""Cliente da API de chat do agente (Leaping AI).

O proxy apenas repassa: abre a conexão SSE do agente e devolve o corpo
já decodificado (gzip/deflate), sem inspecionar, ou envia a mensagem do
usuário. Sem retry nem reconexão.
"""
from typing import AsyncIterator, Optional

import httpx

from backoffice.core.config import settings
from backoffice.core.logging import logger


class LeapingUpstreamError(Exception):
    pass


async def relay_body(client: httpx.AsyncClient, response: httpx.Response) -> AsyncIterator[bytes]:
    """Bytes do stream do agente; fecha resposta e cliente ao terminar."""
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    finally:
        await response.aclose()
        await client.aclose()


class LeapingAIClient:
    def __init__(
        self,
        api_url: str,
        agent_snapshot_id: str,
        bearer_token: str,
        timeout: float = settings.LEAPING_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.agent_snapshot_id = agent_snapshot_id
        self.bearer_token = bearer_token
        self.timeout = timeout
        self.transport = transport

    def url_for(self, reservation_id: str) -> str:
        end_user_id = f"reservation_{reservation_id}"
        return f"{self.api_url}/{self.agent_snapshot_id}?end_user_id={end_user_id}"

    def _client(self, read_timeout: Optional[float]) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, read=read_timeout),
            transport=self.transport,
        )

    def _headers(self, **extra) -> dict:
        headers = {
            "Authorization": f"Bearer {self.bearer_token}",
            "Content-Type": "application/json",
        }
        headers.update(extra)
        return headers

    async def open_stream(self, reservation_id: str) -> AsyncIterator[bytes]:
        # Sem timeout de leitura: o stream fica aberto enquanto o agente falar
        client = self._client(read_timeout=None)
        request = client.build_request(
            "POST",
            self.url_for(reservation_id),
            headers=self._headers(Accept="text/event-stream"),
            json={},
        )
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError:
            await client.aclose()
            raise

        if not response.is_success:
            await response.aclose()
            await client.aclose()
            raise LeapingUpstreamError(f"Connection error: {response.status_code}")

        logger.info(f"Stream do agente aberto para reservation_{reservation_id}")
        return relay_body(client, response)

    async def send_message(self, reservation_id: str, content: Optional[str]) -> None:
        async with self._client(read_timeout=self.timeout) as client:
            response = await client.post(
                self.url_for(reservation_id),
                headers=self._headers(),
                json={"type": "user_message", "content": content},
            )
        if not response.is_success:
            raise LeapingUpstreamError("Error sending message")


def leaping_client_from_settings() -> Optional[LeapingAIClient]:
    if not (settings.LEAPING_API_URL and settings.AGENT_SNAPSHOT_ID and settings.BEARER_TOKEN):
        return None
    return LeapingAIClient(
        api_url=settings.LEAPING_API_URL,
        agent_snapshot_id=settings.AGENT_SNAPSHOT_ID,
        bearer_token=settings.BEARER_TOKEN,
    )
