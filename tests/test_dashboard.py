import uuid
from datetime import date, timedelta

import pytest

from backoffice import crud
from backoffice.services import realtime_service
from backoffice.services.approval_service import RESERVATION_NOT_CREATED

API = "/api/v1"


async def criar_pedido(client, nome="Cliente"):
    response = await client.post(
        f"{API}/orders",
        json={"customerName": nome, "customerPhone": "123", "products": ["Pastel"]},
    )
    return response.json()["order"]


async def criar_aprovacao(client, pessoas=4):
    response = await client.post(
        f"{API}/request-reservation-approval",
        json={
            "customerName": "Rafael",
            "customerPhone": "123",
            "date": (date.today() + timedelta(days=5)).isoformat(),
            "time": "19:30:00",
            "numberOfPeople": pessoas,
        },
    )
    return response.json()["approvalId"]


async def test_active_orders_hide_finished(client):
    ativo = await criar_pedido(client, "Ativo")
    entregue = await criar_pedido(client, "Entregue")
    await client.patch(f"{API}/dashboard/orders/{entregue['id']}/status", json={"status": "delivered"})

    response = await client.get(f"{API}/dashboard/orders")

    assert response.status_code == 200
    assert [o["id"] for o in response.json()["orders"]] == [ativo["id"]]


async def test_dashboard_order_status_any_transition(client):
    pedido = await criar_pedido(client)
    await client.patch(f"{API}/dashboard/orders/{pedido['id']}/status", json={"status": "delivered"})

    response = await client.patch(f"{API}/dashboard/orders/{pedido['id']}/status", json={"status": "pending"})

    assert response.status_code == 200
    assert response.json()["order"]["status"] == "pending"


async def test_dashboard_order_status_unknown_id(client):
    response = await client.patch(f"{API}/dashboard/orders/{uuid.uuid4()}/status", json={"status": "ready"})
    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


async def test_reservations_list_and_status(client):
    cedo = await client.post(
        f"{API}/reservas",
        json={"customer_name": "A", "customer_phone": "1", "number_of_people": 2,
              "reservation_time": "2030-05-01T18:00:00Z"},
    )
    tarde = await client.post(
        f"{API}/reservas",
        json={"customer_name": "B", "customer_phone": "2", "number_of_people": 2,
              "reservation_time": "2030-05-01T21:00:00Z"},
    )
    cedo_id = cedo.json()["reservation"]["id"]
    tarde_id = tarde.json()["reservation"]["id"]

    response = await client.get(f"{API}/dashboard/reservations")
    assert [r["id"] for r in response.json()["reservations"]] == [cedo_id, tarde_id]

    response = await client.patch(f"{API}/dashboard/reservations/{cedo_id}/status", json={"status": "completed"})
    assert response.status_code == 200
    assert response.json()["reservation"]["status"] == "completed"

    response = await client.get(f"{API}/dashboard/reservations")
    assert [r["id"] for r in response.json()["reservations"]] == [tarde_id]

    response = await client.patch(f"{API}/dashboard/reservations/{tarde_id}/status", json={"status": "seated"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid status value"}


async def test_approve_creates_confirmed_reservation(client, feed):
    approval_id = await criar_aprovacao(client, pessoas=4)

    response = await client.get(f"{API}/dashboard/approvals")
    assert [a["id"] for a in response.json()["approvals"]] == [approval_id]

    response = await client.post(
        f"{API}/dashboard/approvals/{approval_id}/respond", json={"status": "approved", "worker_notes": " ok "}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["approval"]["status"] == "approved"
    assert body["approval"]["worker_notes"] == "ok"
    assert body["approval"]["responded_at"] is not None
    assert body["warning"] is None
    reservation = body["reservation"]
    assert reservation["status"] == "confirmed"
    assert reservation["number_of_people"] == 4
    assert "T19:30:00" in reservation["reservation_time"]
    assert [e["table"] for e in feed.events[-2:]] == ["reservation_approvals", "reservations"]

    response = await client.get(f"{API}/dashboard/approvals")
    assert response.json()["approvals"] == []


async def test_reject_creates_no_reservation(client):
    approval_id = await criar_aprovacao(client)

    response = await client.post(f"{API}/dashboard/approvals/{approval_id}/respond", json={"status": "rejected"})

    body = response.json()
    assert body["approval"]["status"] == "rejected"
    assert body["reservation"] is None
    assert (await client.get(f"{API}/dashboard/reservations")).json()["reservations"] == []


async def test_approval_kept_when_reservation_insert_fails(client, monkeypatch):
    approval_id = await criar_aprovacao(client)

    async def falha(*args, **kwargs):
        raise RuntimeError("insert falhou")

    monkeypatch.setattr(crud.reservation, "create", falha)

    response = await client.post(f"{API}/dashboard/approvals/{approval_id}/respond", json={"status": "approved"})

    assert response.status_code == 200
    body = response.json()
    assert body["warning"] == RESERVATION_NOT_CREATED
    assert body["reservation"] is None
    assert body["approval"]["status"] == "approved"

    status = await client.post(f"{API}/check-approval-status", json={"approvalId": approval_id})
    assert status.json()["status"] == "approved"


async def test_respond_validation(client):
    approval_id = await criar_aprovacao(client)

    response = await client.post(f"{API}/dashboard/approvals/{approval_id}/respond", json={"status": "maybe"})
    assert response.status_code == 400

    response = await client.post(f"{API}/dashboard/approvals/{uuid.uuid4()}/respond", json={"status": "approved"})
    assert response.status_code == 404


async def test_realtime_unknown_table(client):
    response = await client.get(f"{API}/dashboard/realtime/usuarios")
    assert response.status_code == 404


async def test_realtime_without_redis(client, monkeypatch):
    async def sem_redis(table):
        return None

    monkeypatch.setattr(realtime_service.realtime_feed, "subscribe", sem_redis)

    response = await client.get(f"{API}/dashboard/realtime/orders")
    assert response.status_code == 503
    assert response.json() == {"error": "Realtime feed unavailable"}


@pytest.mark.parametrize("path", ["/", "/health"])
async def test_root_endpoints(client, path):
    response = await client.get(path)
    assert response.status_code == 200
    assert response.json()["environment"] == "test"


async def test_api_v1_has_no_index_route(client):
    response = await client.get(f"{API}/")
    assert response.status_code == 404
