import uuid
from datetime import date, timedelta

from backoffice import crud

API = "/api/v1"


def approval_payload(**overrides):
    payload = {
        "customerName": "Beatriz",
        "customerPhone": "(11) 4002-8922",
        "date": (date.today() + timedelta(days=3)).isoformat(),
        "time": "20:30:00",
        "numberOfPeople": "6",
        "conversationId": "  conv-123  ",
    }
    payload.update(overrides)
    return payload


async def test_request_approval_and_poll_status(client, feed):
    response = await client.post(f"{API}/request-reservation-approval", json=approval_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Approval request created. Please wait for staff confirmation."
    assert feed.events[-1]["new"]["conversation_id"] == "conv-123"
    assert feed.events[-1]["new"]["number_of_people"] == 6

    response = await client.post(f"{API}/check-approval-status", json={"approvalId": body["approvalId"]})
    assert response.status_code == 200
    assert response.json() == {"status": "pending", "workerNotes": None, "respondedAt": None}


async def test_request_approval_validation(client):
    ontem = (date.today() - timedelta(days=1)).isoformat()
    longe = (date.today() + timedelta(days=400)).isoformat()
    casos = [
        (approval_payload(time=None), "Missing required fields"),
        (approval_payload(date="03/12/2030"), "Invalid date format. Use YYYY-MM-DD"),
        (approval_payload(date=ontem), "Reservation date cannot be in the past"),
        (approval_payload(date=longe), "Reservation date cannot be more than 1 year in the future"),
        (approval_payload(time="20:30"), "Invalid time format. Use HH:MM:SS"),
        (approval_payload(numberOfPeople="150"), "Number of people must be between 1 and 100"),
        (approval_payload(customerPhone="ligue já"), "Invalid phone number format"),
    ]
    for payload, mensagem in casos:
        response = await client.post(f"{API}/request-reservation-approval", json=payload)
        assert response.status_code == 400, mensagem
        assert response.json() == {"error": mensagem, "approvalId": None}


async def test_request_approval_cuts_conversation_id(client, feed):
    response = await client.post(
        f"{API}/request-reservation-approval", json=approval_payload(conversationId="c" * 150)
    )

    assert response.status_code == 200
    assert len(feed.events[-1]["new"]["conversation_id"]) == 100


async def test_check_approval_status_errors(client):
    response = await client.post(f"{API}/check-approval-status", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing approvalId", "status": "error"}

    response = await client.post(f"{API}/check-approval-status", json={"approvalId": str(uuid.uuid4())})
    assert response.status_code == 404
    assert response.json() == {"error": "Approval request not found", "status": "error"}

    response = await client.post(f"{API}/check-approval-status", json={"approvalId": "abc"})
    assert response.status_code == 404


async def test_status_reflects_staff_decision(client):
    approval_id = (await client.post(f"{API}/request-reservation-approval", json=approval_payload())).json()[
        "approvalId"
    ]

    response = await client.post(
        f"{API}/dashboard/approvals/{approval_id}/respond",
        json={"status": "rejected", "worker_notes": "Lotado nesse horário"},
    )
    assert response.status_code == 200

    response = await client.post(f"{API}/check-approval-status", json={"approvalId": approval_id})
    body = response.json()
    assert body["status"] == "rejected"
    assert body["workerNotes"] == "Lotado nesse horário"
    assert body["respondedAt"] is not None


async def test_approval_crud_lists_pending_only(db, feed):
    from backoffice.schemas import ApprovalRequestCreate
    from backoffice.db.models import ApprovalStatus

    pendente = await crud.reservation_approval.create(
        db, obj_in=ApprovalRequestCreate.model_validate(approval_payload())
    )
    respondida = await crud.reservation_approval.create(
        db, obj_in=ApprovalRequestCreate.model_validate(approval_payload(customerName="Outro"))
    )
    await crud.reservation_approval.respond(db, db_obj=respondida, status=ApprovalStatus.APPROVED)

    pendentes = await crud.reservation_approval.get_multi(db, status=ApprovalStatus.PENDING)

    assert [a.id for a in pendentes] == [pendente.id]
