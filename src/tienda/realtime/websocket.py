"""WebSocket endpoints — one push-only channel per entity collection.

Each client connects to /ws/<entity>?token=JWT. The handler:
1. Authenticates via JWT query param (required outside development)
2. Sends a one-line greeting
3. Registers the socket on the entity's BroadcastChannel, then only reads
   to notice disconnects
4. Unregisters the socket when the client goes away

Notifications themselves are pushed by the services, not from here.
"""

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from tienda.config import settings
from tienda.realtime.channels import CHANNEL_PATHS

logger = structlog.get_logger()
router = APIRouter()


async def _authenticate(websocket: WebSocket) -> bool:
    token = websocket.query_params.get("token")

    if not token:
        if settings.environment != "development":
            await websocket.close(code=4001, reason="Authentication required")
            return False
        return True

    from tienda.auth.jwt import TokenError, verify_token

    try:
        payload = verify_token(token)
    except TokenError:
        await websocket.close(code=4001, reason="Invalid or expired token")
        return False

    if "USER" not in payload.get("roles", []):
        await websocket.close(code=4003, reason="Forbidden")
        return False
    return True


async def serve_channel(websocket: WebSocket, entity: str) -> None:
    """Hold one client subscribed to `entity` until it disconnects."""
    registry = getattr(websocket.app.state, "channels", None)
    if registry is None:
        await websocket.close(code=1011)
        return

    if not await _authenticate(websocket):
        return

    channel = registry.get(entity)
    await websocket.accept()
    # Greet before joining so no notification can arrive ahead of the greeting
    await websocket.send_text(f"Updates Web socket: {entity} - Tienda API")
    await channel.connect(websocket)

    try:
        while True:
            # Push-only: inbound frames are read to detect disconnect, then dropped
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await channel.disconnect(websocket)
        if (
            websocket.client_state == WebSocketState.CONNECTED
            and websocket.application_state == WebSocketState.CONNECTED
        ):
            await websocket.close()


def _make_endpoint(entity: str):
    async def endpoint(websocket: WebSocket):
        await serve_channel(websocket, entity)

    endpoint.__name__ = f"ws_{entity.lower()}"
    return endpoint


for _entity, _path in CHANNEL_PATHS:
    router.add_api_websocket_route(_path, _make_endpoint(_entity))
