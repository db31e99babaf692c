"""
Tests for the auction REST API.

Uses FastAPI's TestClient against an app built around a catalog with a
controllable clock.
"""

import sys
import os
from decimal import Decimal

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import inspect

import pytest
from fastapi.testclient import TestClient

from auction import AuctionCatalog, AuctionConfig
from auction.api import create_app


@pytest.fixture
def client(clock):
    config = AuctionConfig()
    app = create_app(AuctionCatalog(config, clock=clock), config)
    return TestClient(app)


def login(client, username, password="pw"):
    client.post("/users", json={"username": username, "password": password})
    response = client.post("/sessions", json={"username": username, "password": password})
    assert response.status_code == 201
    return {"X-Session-Token": response.json()["token"]}


def add_vase(client, headers):
    return client.post("/items", headers=headers, json={
        "name": "Vase",
        "starting_price": "10",
        "reserve_price": "50",
        "duration_minutes": 60,
        "min_bid_increment": "5",
    })


class TestUsersAndSessions:
    """Test registration and login endpoints"""

    def test_register(self, client):
        """Test registration returns 201"""
        response = client.post("/users", json={"username": "alice", "password": "pw"})

        assert response.status_code == 201
        assert response.json()["username"] == "alice"

    def test_register_duplicate(self, client):
        """Test duplicate registration returns 409"""
        client.post("/users", json={"username": "alice", "password": "pw"})

        response = client.post("/users", json={"username": "alice", "password": "pw"})

        assert response.status_code == 409

    def test_login_bad_credentials(self, client):
        """Test wrong password returns 401"""
        client.post("/users", json={"username": "alice", "password": "pw"})

        response = client.post("/sessions", json={"username": "alice", "password": "nope"})

        assert response.status_code == 401

    def test_missing_session(self, client):
        """Test authenticated routes need a session token"""
        assert client.get("/me/bids").status_code == 401
        assert client.get("/me/bids", headers={"X-Session-Token": "bogus"}).status_code == 401

    def test_logout(self, client):
        """Test a closed session stops working"""
        headers = login(client, "alice")

        response = client.delete(f"/sessions/{headers['X-Session-Token']}")
        assert response.status_code == 200

        assert client.get("/me/bids", headers=headers).status_code == 401
        assert client.delete(f"/sessions/{headers['X-Session-Token']}").status_code == 404


class TestItemsAndBids:
    """Test listing and bidding endpoints"""

    def test_add_and_list_items(self, client):
        """Test an added item appears with position 1"""
        headers = login(client, "alice")

        response = add_vase(client, headers)
        assert response.status_code == 201
        assert response.json()["position"] == 1

        items = client.get("/items").json()
        assert len(items) == 1
        assert items[0]["name"] == "Vase"
        assert Decimal(items[0]["minimum_next_bid"]) == Decimal("15")

    def test_add_item_validation(self, client):
        """Test invalid item bodies return 422"""
        headers = login(client, "alice")

        response = client.post("/items", headers=headers, json={
            "name": "Vase",
            "starting_price": "10",
            "reserve_price": "50",
            "duration_minutes": 60,
            "min_bid_increment": "0",
        })

        assert response.status_code == 422

    def test_bid_flow(self, client, clock):
        """Test too-low, accepted, missing and closed bids"""
        headers = login(client, "alice")
        add_vase(client, headers)

        response = client.post("/items/1/bids", headers=headers, json={"amount": "14"})
        assert response.status_code == 400
        assert response.json()["detail"]["minimum"] == "15"

        response = client.post("/items/1/bids", headers=headers, json={"amount": "15"})
        assert response.status_code == 201
        assert Decimal(response.json()["amount"]) == Decimal("15")
        assert response.json()["bidder"] == "alice"

        assert client.post("/items/2/bids", headers=headers, json={"amount": "99"}).status_code == 404

        clock.advance(minutes=61)
        response = client.post("/items/1/bids", headers=headers, json={"amount": "99"})
        assert response.status_code == 409

    def test_my_bids(self, client):
        """Test the caller's ledger"""
        headers = login(client, "alice")
        add_vase(client, headers)
        client.post("/items/1/bids", headers=headers, json={"amount": "20"})

        bids = client.get("/me/bids", headers=headers).json()

        assert [(b["item_name"], Decimal(b["amount"])) for b in bids] == [("Vase", Decimal("20"))]

    def test_watchlist(self, client):
        """Test watching, duplicate watching, and live prices"""
        alice = login(client, "alice")
        bob = login(client, "bob")
        add_vase(client, alice)

        assert client.post("/items/1/watch", headers=alice).status_code == 200
        assert client.post("/items/1/watch", headers=alice).status_code == 409

        client.post("/items/1/bids", headers=bob, json={"amount": "30"})

        watchlist = client.get("/me/watchlist", headers=alice).json()
        assert len(watchlist) == 1
        assert Decimal(watchlist[0]["highest_bid"]) == Decimal("30")


class TestSettlement:
    """Test settlement and history endpoints"""

    def test_vase_scenario(self, client):
        """Test reserve not met, then sold and moved to history"""
        headers = login(client, "alice")
        add_vase(client, headers)
        client.post("/items/1/bids", headers=headers, json={"amount": "20"})

        results = client.post("/settlements", headers=headers).json()
        assert [r["outcome"] for r in results] == ["RESERVE_NOT_MET"]
        assert results[0]["winner"] is None
        assert len(client.get("/items").json()) == 1

        client.post("/items/1/bids", headers=headers, json={"amount": "55"})
        results = client.post("/settlements", headers=headers).json()
        assert results[0]["outcome"] == "SOLD"
        assert results[0]["winner"] == "alice"

        assert client.get("/items").json() == []
        history = client.get("/history").json()
        assert history[0]["item_name"] == "Vase"
        assert Decimal(history[0]["final_price"]) == Decimal("55")


class TestHandlerExecution:
    """Test catalog-backed handlers run off the event loop"""

    def test_catalog_handlers_are_sync(self, client):
        """Test handlers that take the catalog lock are plain functions"""
        paths = {
            "/users", "/sessions", "/sessions/{token}", "/items",
            "/items/{position}/bids", "/items/{position}/watch",
            "/me/bids", "/me/watchlist", "/settlements", "/history",
        }
        routes = [r for r in client.app.routes if getattr(r, "path", None) in paths]

        assert len(routes) == 11
        for route in routes:
            assert not inspect.iscoroutinefunction(route.endpoint), route.path


class TestServiceEndpoints:
    """Test health and metrics"""

    def test_health(self, client):
        """Test health check"""
        assert client.get("/health").json()["status"] == "healthy"

    def test_metrics(self, client):
        """Test Prometheus exposition"""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "auction_bids_total" in response.text
