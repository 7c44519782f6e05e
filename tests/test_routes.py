"""Tests for the HTTP API: storefront, claims and admin routes."""

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.adapters.catalog.in_memory import InMemoryCatalogRepository
from app.adapters.storage.in_memory import InMemoryKeyValueStore
from app.schemas.catalog import AccountCreate, CookieCreate


@pytest.fixture
def netflix_id(catalog_repository: InMemoryCatalogRepository) -> str:
    return catalog_repository.add_account(
        AccountCreate(service="netflix", email="premium1@example.com", password="pw")
    ).id


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json() == {
            "status": "ok",
            "env": "testing",
            "claim_window_hours": 12,
            "claim_storage": "memory",
        }


class TestStorefront:
    def test_list_accounts_for_service(self, client: TestClient, catalog_repository) -> None:
        catalog_repository.add_account(AccountCreate(service="netflix", email="a@x.io", password="pw"))
        catalog_repository.add_account(
            AccountCreate(service="netflix", email="b@x.io", password="pw", status="expired")
        )
        catalog_repository.add_account(AccountCreate(service="steam", email="c@x.io", password="pw"))

        resp = client.get("/v1/accounts", params={"service": "netflix"})

        assert resp.status_code == 200
        assert [a["email"] for a in resp.json()] == ["a@x.io"]

    def test_list_accounts_requires_service(self, client: TestClient) -> None:
        assert client.get("/v1/accounts").status_code == 422

    def test_list_cookies_hides_expired(self, client: TestClient, catalog_repository) -> None:
        catalog_repository.add_cookie(CookieCreate(name="NetflixId", value="v", domain=".netflix.com"))
        catalog_repository.add_cookie(
            CookieCreate(name="Old", value="v", domain=".netflix.com", status="expired")
        )

        resp = client.get("/v1/cookies")

        assert resp.status_code == 200
        assert [c["name"] for c in resp.json()] == ["NetflixId"]


class TestClaims:
    def test_claim_then_blocked(self, client: TestClient, netflix_id: str) -> None:
        headers = {"X-Client-ID": "device-1"}

        first = client.post(f"/v1/accounts/{netflix_id}/claim", headers=headers)
        second = client.post(f"/v1/accounts/{netflix_id}/claim", headers=headers)

        assert first.status_code == 200
        assert first.json()["usage_count"] == 1
        assert first.json()["last_used"] is not None

        assert second.status_code == 429
        assert second.json()["error"]["code"] == "claim_limit_reached"
        assert int(second.headers["Retry-After"]) > 0

    def test_claim_status_tracks_client(self, client: TestClient, netflix_id: str) -> None:
        headers = {"X-Client-ID": "device-1"}

        before = client.get("/v1/claims/status", headers=headers).json()
        client.post(f"/v1/accounts/{netflix_id}/claim", headers=headers)
        after = client.get("/v1/claims/status", headers=headers).json()

        assert before["allowed"] is True
        assert before["retry_after_seconds"] is None
        assert after["allowed"] is False
        assert after["recent_claims"] == 1
        assert after["window_hours"] == 12

    def test_clients_have_separate_histories(
        self, client: TestClient, netflix_id: str, kv_store: InMemoryKeyValueStore
    ) -> None:
        client.post(f"/v1/accounts/{netflix_id}/claim", headers={"X-Client-ID": "device-1"})
        other = client.post(f"/v1/accounts/{netflix_id}/claim", headers={"X-Client-ID": "device-2"})

        assert other.status_code == 200
        assert len(json.loads(kv_store.get("client:device-1:user_claim_timestamps"))) == 1
        assert len(json.loads(kv_store.get("client:device-2:user_claim_timestamps"))) == 1

    def test_missing_client_id_falls_back_to_ip(
        self, client: TestClient, netflix_id: str, kv_store: InMemoryKeyValueStore
    ) -> None:
        resp = client.post(f"/v1/accounts/{netflix_id}/claim")

        assert resp.status_code == 200
        assert kv_store.get("ip:testclient:user_claim_timestamps") is not None

    def test_claim_unknown_account_is_404_and_not_recorded(
        self, client: TestClient, kv_store: InMemoryKeyValueStore
    ) -> None:
        resp = client.post("/v1/accounts/missing/claim", headers={"X-Client-ID": "device-1"})

        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "account_not_found"
        assert len(kv_store) == 0

    def test_corrupt_history_does_not_block(
        self, client: TestClient, netflix_id: str, kv_store: InMemoryKeyValueStore
    ) -> None:
        kv_store.set("client:device-1:user_claim_timestamps", "{corrupt")

        resp = client.post(f"/v1/accounts/{netflix_id}/claim", headers={"X-Client-ID": "device-1"})

        assert resp.status_code == 200


class TestAdmin:
    def test_admin_requires_key(self, client: TestClient) -> None:
        assert client.get("/v1/admin/accounts").status_code == 403
        assert client.get("/v1/admin/accounts", headers={"X-API-Key": "wrong"}).status_code == 403

    def test_account_crud(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        created = client.post(
            "/v1/admin/accounts",
            json={"service": "steam", "email": "gamer@example.com", "password": "pw"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        account_id = created.json()["id"]
        assert created.json()["usage_count"] == 0

        updated = client.patch(
            f"/v1/admin/accounts/{account_id}",
            json={"status": "expired"},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["status"] == "expired"

        listed = client.get("/v1/admin/accounts", headers=admin_headers)
        assert [a["id"] for a in listed.json()] == [account_id]
        # Expired accounts are hidden from the storefront
        assert client.get("/v1/accounts", params={"service": "steam"}).json() == []

        deleted = client.delete(f"/v1/admin/accounts/{account_id}", headers=admin_headers)
        assert deleted.status_code == 204
        assert client.get("/v1/admin/accounts", headers=admin_headers).json() == []

    def test_update_unknown_account_is_404(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        resp = client.patch("/v1/admin/accounts/missing", json={"status": "expired"}, headers=admin_headers)

        assert resp.status_code == 404
        assert resp.json()["error"]["details"]["account_id"] == "missing"

    def test_invalid_account_payload_is_422(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        resp = client.post(
            "/v1/admin/accounts",
            json={"service": "steam", "email": "gamer@example.com", "password": "pw", "status": "bogus"},
            headers=admin_headers,
        )

        assert resp.status_code == 422

    def test_cookie_create_and_delete(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        created = client.post(
            "/v1/admin/cookies",
            json={"name": "NetflixId", "value": "abc", "domain": ".netflix.com"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        cookie_id = created.json()["id"]

        assert client.delete(f"/v1/admin/cookies/{cookie_id}", headers=admin_headers).status_code == 204
        assert client.delete(f"/v1/admin/cookies/{cookie_id}", headers=admin_headers).status_code == 404

    @patch("app.core.auth.settings")
    def test_admin_open_when_auth_disabled(self, mock_settings, client: TestClient) -> None:
        mock_settings.app.api_key_required = False

        assert client.get("/v1/admin/accounts").status_code == 200


class TestServiceRequests:
    PAYLOAD = {
        "email": "viewer@example.com",
        "service": "crunchyroll",
        "plan": "mega_fan",
        "reason": "Following three seasonal anime this spring",
    }

    def test_submit_is_public(self, client: TestClient) -> None:
        resp = client.post("/v1/requests", json=self.PAYLOAD)

        assert resp.status_code == 201
        assert resp.json()["status"] == "pending"
        assert resp.json()["service"] == "crunchyroll"

    def test_submit_validates_payload(self, client: TestClient) -> None:
        resp = client.post("/v1/requests", json={**self.PAYLOAD, "email": "nope"})

        assert resp.status_code == 422

    def test_admin_reviews_requests(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        request_id = client.post("/v1/requests", json=self.PAYLOAD).json()["id"]

        pending = client.get("/v1/admin/requests", params={"status": "pending"}, headers=admin_headers)
        assert [r["id"] for r in pending.json()] == [request_id]

        approved = client.patch(
            f"/v1/admin/requests/{request_id}", json={"status": "approved"}, headers=admin_headers
        )
        assert approved.status_code == 200
        assert approved.json()["status"] == "approved"

        again = client.patch(
            f"/v1/admin/requests/{request_id}", json={"status": "denied"}, headers=admin_headers
        )
        assert again.status_code == 409
        assert again.json()["error"]["code"] == "request_already_resolved"

        still_pending = client.get(
            "/v1/admin/requests", params={"status": "pending"}, headers=admin_headers
        )
        assert still_pending.json() == []

    def test_review_requires_admin_key(self, client: TestClient) -> None:
        assert client.get("/v1/admin/requests").status_code == 403
        assert client.patch("/v1/admin/requests/x", json={"status": "approved"}).status_code == 403

    def test_decide_unknown_request_is_404(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        resp = client.patch("/v1/admin/requests/missing", json={"status": "denied"}, headers=admin_headers)

        assert resp.status_code == 404


class TestAdminGames:
    def test_game_crud(self, client: TestClient, admin_headers: dict[str, str], catalog_repository) -> None:
        account_id = catalog_repository.add_account(
            AccountCreate(service="steam", email="gamer@example.com", password="pw")
        ).id
        base = f"/v1/admin/accounts/{account_id}/games"

        created = client.post(base, json={"name": "Cyberpunk 2077"}, headers=admin_headers)
        assert created.status_code == 201
        game_id = created.json()["id"]
        assert created.json()["account_id"] == account_id

        updated = client.patch(
            f"{base}/{game_id}", json={"description": "Open-world RPG"}, headers=admin_headers
        )
        assert updated.json()["description"] == "Open-world RPG"
        assert updated.json()["name"] == "Cyberpunk 2077"

        assert [g["id"] for g in client.get(base, headers=admin_headers).json()] == [game_id]
        # Games are part of the public account listing and its search
        listed = client.get("/v1/accounts", params={"service": "steam", "game": "cyber"}).json()
        assert [g["name"] for g in listed[0]["games"]] == ["Cyberpunk 2077"]
        assert client.get("/v1/accounts", params={"service": "steam", "game": "tetris"}).json() == []

        assert client.delete(f"{base}/{game_id}", headers=admin_headers).status_code == 204
        assert client.delete(f"{base}/{game_id}", headers=admin_headers).status_code == 404

    def test_game_on_unknown_account_is_404(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        resp = client.post("/v1/admin/accounts/missing/games", json={"name": "Portal"}, headers=admin_headers)

        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "account_not_found"

    def test_game_requires_name(self, client: TestClient, admin_headers: dict[str, str], netflix_id: str) -> None:
        resp = client.post(f"/v1/admin/accounts/{netflix_id}/games", json={"name": ""}, headers=admin_headers)

        assert resp.status_code == 422


def test_openapi_marks_admin_routes(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()

    assert "AdminApiKey" in schema["components"]["securitySchemes"]
    assert schema["paths"]["/v1/admin/accounts"]["get"]["security"] == [{"AdminApiKey": []}]
    assert "security" not in schema["paths"]["/v1/cookies"]["get"]
    assert "security" not in schema["paths"]["/v1/requests"]["post"]
    assert schema["paths"]["/v1/admin/requests/{request_id}"]["patch"]["security"] == [{"AdminApiKey": []}]
