# backoffice/api/v1/endpoints/leaping_proxy.py
from typing import Any, Optional

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from backoffice import schemas
from backoffice.api import deps
from backoffice.core.logging import logger
from backoffice.services.leaping_service import LeapingAIClient, LeapingUpstreamError

router = APIRouter()

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post("/leaping-ai-proxy")
async def leaping_ai_proxy(
    body: Any = Body(None),
    client: Optional[LeapingAIClient] = Depends(deps.get_leaping_client),
) -> Any:
    """
    Relay entre o chat do painel e o agente.
    - `connect`: abre o stream SSE do agente e repassa os bytes como chegam.
    - `send`: envia a mensagem do usuário para a mesma conversa.
    """
    if client is None:
        logger.error("Leaping AI não configurado (LEAPING_API_URL, AGENT_SNAPSHOT_ID, BEARER_TOKEN)")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server configuration error")

    proxy_in = deps.parse_payload(schemas.LeapingProxyRequest, body)

    try:
        if proxy_in.action == "connect":
            upstream = await client.open_stream(proxy_in.reservation_id)
            return StreamingResponse(upstream, media_type="text/event-stream", headers=SSE_HEADERS)

        if proxy_in.action == "send":
            await client.send_message(proxy_in.reservation_id, proxy_in.content)
            return {"success": True}
    except (LeapingUpstreamError, httpx.HTTPError) as e:
        logger.error(f"Erro no proxy do agente (reserva {proxy_in.reservation_id}): {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e) or "Unknown error")

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")
