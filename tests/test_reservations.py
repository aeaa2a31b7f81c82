from datetime import date, datetime, timedelta, timezone

from backoffice import crud

API = "/api/v1"


def reserva_payload(**overrides):
    payload = {
        "customer_name": "Carlos",
        "customer_phone": "+55 21 98888-7777",
        "number_of_people": 4,
        "reservation_time": "2030-12-01T19:00:00-03:00",
    }
    payload.update(overrides)
    return payload


async def test_create_reservation_normalizes_time_to_utc(client, feed):
    response = await client.post(f"{API}/reservas", json=reserva_payload())

    assert response.status_code == 201
    reservation = response.json()["reservation"]
    assert reservation["status"] == "pending"
    assert reservation["number_of_people"] == 4
    assert reservation["reservation_time"].startswith("2030-12-01T22:00:00")
    assert feed.events[-1]["table"] == "reservations"


async def test_create_reservation_validation(client):
    response = await client.post(f"{API}/reservas", json={"customer_name": "Carlos"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Missing required fields: customer_name")

    for pessoas in (101, "4", True, 2.5):
        response = await client.post(f"{API}/reservas", json=reserva_payload(number_of_people=pessoas))
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid number_of_people: must be a number between 1 and 100"}

    response = await client.post(f"{API}/reservas", json=reserva_payload(reservation_time="amanhã às 8"))
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid reservation_time: must be a valid ISO 8601 date"}


def proxima_data(dias=7):
    return (date.today() + timedelta(days=dias)).isoformat()


async def seed_reservation(db, people, when, status=None):
    kwargs = {} if status is None else {"status": status}
    return await crud.reservation.create(
        db,
        customer_name="Grupo",
        customer_phone="123",
        number_of_people=people,
        reservation_time=when,
        **kwargs,
    )


async def test_availability_slot_free(client):
    response = await client.post(
        f"{API}/check-reservation-availability",
        json={"date": proxima_data(), "time": "19:00:00", "numberOfPeople": 4},
    )

    assert response.status_code == 200
    assert response.json() == {"available": True, "message": "Reservation slot available"}


async def test_availability_not_enough_capacity(client, db, feed):
    dia = proxima_data()
    slot = datetime.fromisoformat(f"{dia}T19:00:00").replace(tzinfo=timezone.utc)
    await seed_reservation(db, 40, slot)
    await seed_reservation(db, 8, slot + timedelta(minutes=15))
    # Fora da janela de 30 minutos
    await seed_reservation(db, 30, slot + timedelta(hours=2))

    response = await client.post(
        f"{API}/check-reservation-availability",
        json={"date": dia, "time": "19:00:00", "numberOfPeople": 5},
    )

    assert response.status_code == 200
    assert response.json() == {
        "available": False,
        "reason": "Not enough capacity. Maximum 50 people per time slot. Currently 48 people reserved.",
    }


async def test_availability_past_and_closed(client):
    response = await client.post(
        f"{API}/check-reservation-availability",
        json={"date": "2020-01-01", "time": "19:00:00", "numberOfPeople": 2},
    )
    assert response.json() == {"available": False, "reason": "Cannot make reservations in the past"}

    response = await client.post(
        f"{API}/check-reservation-availability",
        json={"date": proxima_data(), "time": "09:30:00", "numberOfPeople": 2},
    )
    assert response.json() == {"available": False, "reason": "Restaurant is closed. Hours: 12:00 PM - 11:00 PM"}


async def test_availability_missing_fields(client):
    response = await client.post(f"{API}/check-reservation-availability", json={"date": proxima_data()})

    assert response.status_code == 400
    assert response.json() == {
        "available": False,
        "reason": "Missing required fields: date, time, numberOfPeople",
    }


async def test_availability_counts_only_active_reservations_and_window_edges(client, db, feed):
    from backoffice.db.models import ReservationStatus

    dia = proxima_data()
    slot = datetime.fromisoformat(f"{dia}T19:00:00").replace(tzinfo=timezone.utc)
    await seed_reservation(db, 40, slot, status=ReservationStatus.REJECTED)
    await seed_reservation(db, 40, slot, status=ReservationStatus.COMPLETED)
    await seed_reservation(db, 45, slot + timedelta(minutes=30), status=ReservationStatus.CONFIRMED)
    # Um minuto antes do início da janela
    await seed_reservation(db, 45, slot - timedelta(minutes=31), status=ReservationStatus.PENDING)

    response = await client.post(
        f"{API}/check-reservation-availability",
        json={"date": dia, "time": "19:00:00", "numberOfPeople": 6},
    )
    assert response.json() == {
        "available": False,
        "reason": "Not enough capacity. Maximum 50 people per time slot. Currently 45 people reserved.",
    }

    response = await client.post(
        f"{API}/check-reservation-availability",
        json={"date": dia, "time": "19:00:00", "numberOfPeople": 5},
    )
    assert response.json() == {"available": True, "message": "Reservation slot available"}
