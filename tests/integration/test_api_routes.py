"""
Integration tests for the API against PostgreSQL.

Runs the real application (lifespan, pool, migrations) through TestClient.
Requires PostgreSQL to be running; skipped otherwise.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from psycopg_pool import ConnectionPool

from src.api.main import app

pytestmark = pytest.mark.integration


@pytest.fixture
def client(pool: ConnectionPool) -> Generator[TestClient, None, None]:
    """Test client with lifespan; `pool` ensures the database is reachable and clean."""
    with TestClient(app) as test_client:
        yield test_client


class TestAddressBookFlow:
    """End-to-end address book flows."""

    def test_health(self, client: TestClient) -> None:
        """Health check reaches the database."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_create_update_delete_round_trip(self, client: TestClient) -> None:
        """create A -> rename B -> read B -> delete -> 404."""
        created = client.post("/v1/addressbooks", json={"name": "A"}).json()
        book_id = created["id"]

        renamed = client.put(f"/v1/addressbooks/{book_id}", json={"name": "B"})
        assert renamed.status_code == 200

        assert client.get(f"/v1/addressbooks/{book_id}").json()["name"] == "B"

        assert client.delete(f"/v1/addressbooks/{book_id}").status_code == 204
        assert client.get(f"/v1/addressbooks/{book_id}").status_code == 404

    def test_eager_and_lazy_views(self, client: TestClient) -> None:
        """Eager embeds contacts in insertion order; lazy returns none."""
        book_id = client.post("/v1/addressbooks", json={"name": "Friends"}).json()["id"]
        first = client.post(
            f"/v1/addressbooks/{book_id}/contacts", json={"name": "C1", "address": "A1"}
        ).json()
        second = client.post(
            f"/v1/addressbooks/{book_id}/contacts",
            json={"name": "C2", "address": "A2", "email": "c2@example.com"},
        ).json()

        eager = client.get(f"/v1/addressbooks/{book_id}").json()
        lazy = client.get(f"/v1/addressbooks/{book_id}", params={"loading_strategy": "lazy"}).json()

        assert eager["contacts"] == [first, second]
        assert lazy == {"id": book_id, "name": "Friends", "contacts": []}

    def test_invalid_strategy_is_400(self, client: TestClient) -> None:
        """An unknown strategy is rejected."""
        response = client.get("/v1/addressbooks", params={"loading_strategy": "foo"})
        assert response.status_code == 400

    def test_paging(self, client: TestClient) -> None:
        """Two pages of two partition four books."""
        for i in range(4):
            client.post("/v1/addressbooks", json={"name": f"Book {i}"})

        first = client.get("/v1/addressbooks", params={"limit": "2", "offset": "0"}).json()
        second = client.get("/v1/addressbooks", params={"limit": "2", "offset": "2"}).json()

        names = [b["name"] for b in first + second]
        assert sorted(names) == [f"Book {i}" for i in range(4)]

    def test_duplicate_name_is_generic_500(self, client: TestClient) -> None:
        """Store failures do not leak engine text."""
        client.post("/v1/addressbooks", json={"name": "Same"})

        response = client.post("/v1/addressbooks", json={"name": "Same"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Something went wrong"}
        assert "unique" not in response.text.lower()


class TestContactFlow:
    """End-to-end contact flows."""

    def test_contact_scoped_to_its_book(self, client: TestClient) -> None:
        """A contact is 404 through another book's path."""
        owner = client.post("/v1/addressbooks", json={"name": "Owner"}).json()["id"]
        other = client.post("/v1/addressbooks", json={"name": "Other"}).json()["id"]
        contact_id = client.post(
            f"/v1/addressbooks/{owner}/contacts", json={"name": "Mine", "address": "Here"}
        ).json()["id"]

        assert client.get(f"/v1/addressbooks/{other}/contacts/{contact_id}").status_code == 404
        assert client.delete(f"/v1/addressbooks/{other}/contacts/{contact_id}").status_code == 404
        assert client.get(f"/v1/addressbooks/{owner}/contacts/{contact_id}").status_code == 200

    def test_contact_update_and_delete(self, client: TestClient) -> None:
        """PUT replaces fields; DELETE removes the contact."""
        book_id = client.post("/v1/addressbooks", json={"name": "Owner"}).json()["id"]
        path = f"/v1/addressbooks/{book_id}/contacts"
        contact_id = client.post(path, json={"name": "Old", "address": "Here"}).json()["id"]

        updated = client.put(
            f"{path}/{contact_id}", json={"name": "New", "address": "There", "phone_number": "42"}
        )
        assert updated.status_code == 200
        assert updated.json()["phone_number"] == "42"

        assert client.delete(f"{path}/{contact_id}").status_code == 204
        assert client.get(path).json() == []
