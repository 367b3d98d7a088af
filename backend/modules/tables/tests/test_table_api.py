# backend/modules/tables/tests/test_table_api.py

"""
Tests for table and seating API endpoints.
"""

import pytest
from datetime import date, time
from fastapi.testclient import TestClient
from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from modules.reservations.models.reservation_models import Reservation, ReservationStatus
from modules.tables.models.table_models import Table, TableStatus


class TestTableAPI:

    @pytest.fixture
    def tables(self, db_session: Session):
        rows = [
            Table(table_name="Bar #1", capacity=1, status=TableStatus.FREE),
            Table(table_name="#1", capacity=6, status=TableStatus.FREE),
        ]
        db_session.add_all(rows)
        db_session.commit()
        return rows

    @pytest.fixture
    def reservation(self, db_session: Session):
        reservation = Reservation(
            first_name="Frank", last_name="Palmer", mobile_number="202-555-0153",
            reservation_date=date(2099, 1, 7), reservation_time=time(13, 30),
            people=2, status=ReservationStatus.BOOKED,
        )
        db_session.add(reservation)
        db_session.commit()
        return reservation

    def test_list_tables(self, client: TestClient, tables):
        response = client.get("/tables")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert [t["table_name"] for t in data] == ["#1", "Bar #1"]
        assert all(t["status"] == "free" for t in data)

    def test_read_table(self, client: TestClient, tables):
        response = client.get(f"/tables/{tables[1].table_id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["capacity"] == 6

    def test_read_missing_table(self, client: TestClient):
        response = client.get("/tables/99")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "table id: 99 does not exist"

    def test_create_table(self, client: TestClient):
        response = client.post("/tables", json={"data": {"table_name": "Patio", "capacity": 4}})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["table_name"] == "Patio"
        assert data["capacity"] == 4
        assert data["status"] == "free"
        assert data["reservation_id"] is None

    def test_create_table_with_reservation(
        self, client: TestClient, reservation, db_session: Session
    ):
        response = client.post(
            "/tables",
            json={
                "data": {
                    "table_name": "Patio",
                    "capacity": 4,
                    "reservation_id": reservation.reservation_id,
                }
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["status"] == "occupied"
        assert data["reservation_id"] == reservation.reservation_id

        db_session.expire_all()
        assert db_session.get(Reservation, reservation.reservation_id).status == (
            ReservationStatus.SEATED
        )

    def test_create_table_with_short_name(self, client: TestClient):
        response = client.post("/tables", json={"data": {"table_name": "A", "capacity": 4}})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_LENGTH"

    def test_create_table_without_data(self, client: TestClient):
        response = client.post("/tables", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "MISSING_DATA"

    def test_seat_and_finish(self, client: TestClient, tables, reservation):
        table_id = tables[1].table_id

        seat = client.put(
            f"/tables/{table_id}/seat",
            json={"data": {"reservation_id": reservation.reservation_id}},
        )
        assert seat.status_code == status.HTTP_200_OK
        assert seat.json() == {"data": {"status": "seated"}}

        occupied = client.get(f"/tables/{table_id}").json()["data"]
        assert occupied["status"] == "occupied"
        assert occupied["reservation_id"] == reservation.reservation_id

        seated = client.get(f"/reservations/{reservation.reservation_id}").json()["data"]
        assert seated["status"] == "seated"

        finish = client.delete(f"/tables/{table_id}/seat")
        assert finish.status_code == status.HTTP_200_OK
        assert finish.json() == {"data": {"status": "finished"}}

        freed = client.get(f"/tables/{table_id}").json()["data"]
        assert freed["status"] == "free"
        assert freed["reservation_id"] is None

        finished = client.get(f"/reservations/{reservation.reservation_id}").json()["data"]
        assert finished["status"] == "finished"

    def test_finished_reservation_leaves_listing(
        self, client: TestClient, tables, reservation
    ):
        table_id = tables[1].table_id
        client.put(
            f"/tables/{table_id}/seat",
            json={"data": {"reservation_id": reservation.reservation_id}},
        )
        client.delete(f"/tables/{table_id}/seat")

        response = client.get("/reservations", params={"date": "2099-01-07"})
        assert response.json() == {"data": []}

    def test_seat_over_capacity(self, client: TestClient, tables, reservation):
        response = client.put(
            f"/tables/{tables[0].table_id}/seat",
            json={"data": {"reservation_id": reservation.reservation_id}},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "CAPACITY_EXCEEDED"

        table = client.get(f"/tables/{tables[0].table_id}").json()["data"]
        assert table["status"] == "free"

    def test_seat_without_reservation_id(self, client: TestClient, tables):
        response = client.put(f"/tables/{tables[1].table_id}/seat", json={"data": {}})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "reservation_id field is required in the body"

    def test_seat_missing_reservation(self, client: TestClient, tables):
        response = client.put(
            f"/tables/{tables[1].table_id}/seat", json={"data": {"reservation_id": 999}}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "reservation_id: 999 does not exist"

    def test_seat_missing_table(self, client: TestClient, reservation):
        response = client.put(
            "/tables/999/seat", json={"data": {"reservation_id": reservation.reservation_id}}
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.parametrize("table_id", [0, 2**31, 2**70])
    def test_out_of_range_table_id(self, client: TestClient, reservation, table_id):
        read = client.get(f"/tables/{table_id}")
        seat = client.put(
            f"/tables/{table_id}/seat",
            json={"data": {"reservation_id": reservation.reservation_id}},
        )
        finish = client.delete(f"/tables/{table_id}/seat")

        for response in (read, seat, finish):
            assert response.status_code == status.HTTP_400_BAD_REQUEST
            assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_seat_with_oversized_reservation_id(self, client: TestClient, tables):
        response = client.put(
            f"/tables/{tables[1].table_id}/seat", json={"data": {"reservation_id": 2**70}}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_RANGE"

        table = client.get(f"/tables/{tables[1].table_id}").json()["data"]
        assert table["status"] == "free"

    def test_create_table_with_oversized_values(self, client: TestClient, db_session: Session):
        too_long = client.post("/tables", json={"data": {"table_name": "T" * 51, "capacity": 4}})
        too_big = client.post("/tables", json={"data": {"table_name": "Patio", "capacity": 2**70}})

        assert too_long.status_code == status.HTTP_400_BAD_REQUEST
        assert too_long.json()["error_code"] == "INVALID_LENGTH"
        assert too_big.status_code == status.HTTP_400_BAD_REQUEST
        assert too_big.json()["error_code"] == "INVALID_CAPACITY"
        assert db_session.query(Table).count() == 0

    def test_finish_free_table(self, client: TestClient, tables):
        response = client.delete(f"/tables/{tables[1].table_id}/seat")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "status": 400,
            "message": "this table is not occupied",
            "error_code": "NOT_OCCUPIED",
        }

    def test_finish_missing_table(self, client: TestClient):
        response = client.delete("/tables/999/seat")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_store_failure_is_a_server_error(
        self, client: TestClient, tables, reservation, db_session: Session, monkeypatch
    ):
        def failing_commit():
            raise SQLAlchemyError("commit failed")

        monkeypatch.setattr(db_session, "commit", failing_commit)

        response = client.put(
            f"/tables/{tables[1].table_id}/seat",
            json={"data": {"reservation_id": reservation.reservation_id}},
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error_code"] == "INTERNAL_ERROR"
