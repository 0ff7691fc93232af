"""WebSocket channel tests — real sockets through Starlette's TestClient.

TestClient runs the app lifespan and its own event loop; broadcasts are
pushed into that loop with tc.portal.call(). Membership is read the same way:
the handler joins right after greeting, so the check has to run on the
server loop, not race it from the test thread.
"""

from types import SimpleNamespace

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect, WebSocketState

from tienda.auth.jwt import create_access_token
from tienda.config import settings
from tienda.main import app
from tienda.realtime.notifications import Notification, NotificationType
from tienda.realtime.websocket import serve_channel


@pytest.fixture
def tc(channels, cache):
    with TestClient(app) as test_client:
        yield test_client


def test_connect_receives_greeting_then_notifications(tc, channels):
    channel = channels.get("Product")
    with tc.websocket_connect("/ws/product") as ws:
        assert ws.receive_text() == "Updates Web socket: Product - Tienda API"
        assert tc.portal.call(channel.count) == 1

        note = Notification(
            entity="Product", type=NotificationType.UPDATE, data={"name": "Producto A"}
        )
        delivered = tc.portal.call(channel.broadcast, note)
        assert delivered == 1

        msg = ws.receive_json()
        assert msg["entity"] == "Product"
        assert msg["type"] == "UPDATE"
        assert msg["data"] == {"name": "Producto A"}

    assert channel.count() == 0


@pytest.mark.parametrize(
    "path, entity",
    [
        ("/ws/category", "Category"),
        ("/ws/suppliers", "Suppliers"),
        ("/ws/employee", "Employee"),
        ("/ws/clients", "Client"),
    ],
)
def test_each_path_joins_its_own_channel(tc, channels, path, entity):
    with tc.websocket_connect(path) as ws:
        assert ws.receive_text() == f"Updates Web socket: {entity} - Tienda API"
        counts = tc.portal.call(channels.counts)
        assert counts[entity] == 1
        assert counts["Product"] == 0


def test_inbound_frames_are_ignored(tc, channels):
    channel = channels.get("Client")
    with tc.websocket_connect("/ws/clients") as ws:
        ws.receive_text()
        ws.send_text("hola")
        note = Notification(entity="Client", type=NotificationType.DELETE, data={"id": 3})
        tc.portal.call(channel.broadcast, note)
        assert ws.receive_json()["type"] == "DELETE"


def test_token_required_outside_development(tc, monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")
    with pytest.raises(WebSocketDisconnect) as exc:
        with tc.websocket_connect("/ws/product"):
            pass
    assert exc.value.code == 4001


def test_valid_token_accepted_outside_development(tc, monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")
    token = create_access_token(1, "ana", ["USER"])
    with tc.websocket_connect(f"/ws/product?token={token}") as ws:
        assert ws.receive_text().startswith("Updates Web socket: Product")


def test_token_without_user_role_is_forbidden(tc):
    token = create_access_token(1, "bot", [])
    with pytest.raises(WebSocketDisconnect) as exc:
        with tc.websocket_connect(f"/ws/employee?token={token}"):
            pass
    assert exc.value.code == 4003


class ScriptedSocket:
    """Minimal WebSocket double that hangs up on the first read."""

    def __init__(self, registry):
        self.app = SimpleNamespace(state=SimpleNamespace(channels=registry))
        self.query_params = {}
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED
        self.frames: list[tuple[str, int]] = []
        self._registry = registry

    async def accept(self):
        pass

    async def send_text(self, data: str):
        # record how many subscribers the channel had when this frame went out
        self.frames.append((data, self._registry.get("Product").count()))

    async def receive_text(self):
        self.client_state = WebSocketState.DISCONNECTED
        raise WebSocketDisconnect(code=1000)

    async def close(self, code: int = 1000):
        self.application_state = WebSocketState.DISCONNECTED


@pytest.mark.asyncio
async def test_greeting_is_sent_before_joining_channel(channels):
    socket = ScriptedSocket(channels)

    await serve_channel(socket, "Product")

    assert socket.frames == [("Updates Web socket: Product - Tienda API", 0)]
    assert channels.get("Product").count() == 0
    assert socket.application_state == WebSocketState.CONNECTED
