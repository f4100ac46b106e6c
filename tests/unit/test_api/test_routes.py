"""
Unit tests for API routes
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from api.app import create_app
from api.routes import parse_quote_id
from storage import BaseStorage, MemStorage


@pytest.mark.unit
class TestParseQuoteId:
    """Test cases for path id parsing"""

    @pytest.mark.parametrize("raw,expected", [
        ("1", 1),
        ("42", 42),
        ("007", 7),
        ("0", 0),
    ])
    def test_valid_ids(self, raw, expected):
        assert parse_quote_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "-1", "", " 3", "3a", "１"])
    def test_invalid_ids(self, raw):
        assert parse_quote_id(raw) is None


@pytest.mark.unit
class TestAPIRoutes:
    """Test cases for API routes"""

    @pytest.fixture
    def failing_storage(self):
        """Catalog whose reads always fail"""
        mock = AsyncMock(spec=BaseStorage)
        mock.count_quotes.return_value = 0
        mock.list_quotes.side_effect = RuntimeError("disk on fire")
        mock.get_quote_by_id.side_effect = RuntimeError("disk on fire")
        return mock

    @pytest.fixture
    def failing_client(self, failing_storage):
        with TestClient(create_app(failing_storage)) as test_client:
            yield test_client

    @pytest.fixture
    def empty_client(self):
        with TestClient(create_app(MemStorage())) as test_client:
            yield test_client

    def test_root_endpoint(self, client):
        """Test root endpoint"""
        response = client.get("/")
        assert response.status_code == 200
        assert "Quote API" in response.json()["message"]

    def test_health_check_endpoint(self, client):
        """Test health check endpoint"""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["quotes_count"] == 8
        assert "timestamp" in data
        assert "version" in data

    def test_get_quotes(self, client):
        """Test listing all quotes"""
        response = client.get("/api/quotes")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 8
        assert [q["id"] for q in data] == list(range(1, 9))
        assert set(data[0]) == {"id", "text", "author", "category"}
        assert data[0]["author"] == "Steve Jobs"

    def test_get_quotes_empty_catalog(self, empty_client):
        """Empty catalog lists as an empty array"""
        response = empty_client.get("/api/quotes")
        assert response.status_code == 200
        assert response.json() == []

    def test_get_quote_by_id(self, client):
        """Test getting a quote by id"""
        response = client.get("/api/quotes/3")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 3
        assert data["author"] == "Eleanor Roosevelt"
        assert data["text"] == "The future belongs to those who believe in the beauty of their dreams."
        assert data["category"] == "dreams"

    @pytest.mark.parametrize("quote_id", ["99", "0", "abc", "1.5", "-1"])
    def test_get_quote_not_found(self, client, quote_id):
        """Unknown and malformed ids are both 404"""
        response = client.get(f"/api/quotes/{quote_id}")
        assert response.status_code == 404
        assert response.json() == {"detail": "Quote not found"}

    def test_random_quote(self, client):
        """Random quote is one of the catalog quotes"""
        catalog = {q["id"]: q for q in client.get("/api/quotes").json()}
        response = client.get("/api/quotes/random")
        assert response.status_code == 200
        data = response.json()
        assert catalog[data["id"]] == data

    def test_random_quote_not_shadowed_by_id_route(self, client):
        """'random' is not treated as an id"""
        response = client.get("/api/quotes/random")
        assert response.status_code != 404

    def test_random_quote_empty_catalog(self, empty_client):
        """Random on an empty catalog is 404"""
        response = empty_client.get("/api/quotes/random")
        assert response.status_code == 404
        assert response.json() == {"detail": "No quotes available"}

    def test_list_storage_failure(self, failing_client):
        """Storage failure on list is a generic 500"""
        response = failing_client.get("/api/quotes")
        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to fetch quotes"}
        assert "disk on fire" not in response.text

    def test_random_storage_failure(self, failing_client):
        response = failing_client.get("/api/quotes/random")
        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to fetch random quote"}

    def test_get_by_id_storage_failure(self, failing_client):
        response = failing_client.get("/api/quotes/1")
        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to fetch quote"}

    def test_process_time_header(self, client):
        """Logging middleware adds processing time"""
        response = client.get("/api/quotes")
        assert "X-Process-Time" in response.headers

    def test_cors_allowed_origin(self, client):
        """Configured origins are allowed"""
        response = client.get("/api/quotes", headers={"Origin": "http://localhost:3000"})
        assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"

    def test_app_without_storage_seeds_catalog(self):
        """Default app builds a seeded in-memory catalog"""
        with TestClient(create_app()) as test_client:
            assert len(test_client.get("/api/quotes").json()) == 8

    def test_apps_do_not_share_catalogs(self):
        """Each app owns its catalog"""
        first = TestClient(create_app(MemStorage(seed=True)))
        second = TestClient(create_app(MemStorage()))
        assert len(first.get("/api/quotes").json()) == 8
        assert second.get("/api/quotes").json() == []
