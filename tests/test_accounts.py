"""Tests for account endpoints."""

from datetime import date

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest.fixture
def create_account(async_client, auth_headers):
    async def _create(name: str = "Cash", **fields) -> dict:
        response = await async_client.post(
            "/api/accounts", json={"name": name, **fields}, headers=auth_headers
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


class TestAccountCrud:
    async def test_create_defaults(self, create_account):
        account = await create_account()
        assert account["balance"] == 0
        assert account["goal"] is None
        assert account["type"] == "ACTIVATED"

    async def test_duplicate_name(self, async_client, auth_headers, create_account):
        await create_account("Cash")
        response = await async_client.post(
            "/api/accounts", json={"name": "Cash"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Account with this name already exists for the current user!"
        )

    async def test_same_name_for_different_users(
        self, async_client, create_account, user_factory, login
    ):
        await create_account("Cash")
        await user_factory(email="bob@example.com", name="Bob")
        bob_headers = await login("bob@example.com")
        response = await async_client.post(
            "/api/accounts", json={"name": "Cash"}, headers=bob_headers
        )
        assert response.status_code == 201

    async def test_get_unknown(self, async_client, auth_headers):
        response = await async_client.get(
            "/api/accounts/00000000-0000-0000-0000-000000000000", headers=auth_headers
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Account with this ID does not exist!"

    async def test_other_users_account_forbidden(
        self, async_client, create_account, user_factory, login
    ):
        account = await create_account()
        await user_factory(email="bob@example.com", name="Bob")
        bob_headers = await login("bob@example.com")

        response = await async_client.get(f"/api/accounts/{account['id']}", headers=bob_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "User does not own this resource!"

    async def test_update(self, async_client, auth_headers, create_account):
        account = await create_account()
        response = await async_client.put(
            f"/api/accounts/{account['id']}",
            json={"name": "Wallet", "balance": 12.5, "goal": 100},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Wallet"
        assert data["balance"] == 12.5
        assert data["goal"] == 100
        assert data["type"] == "ACTIVATED"

    async def test_update_goal(self, async_client, auth_headers, create_account):
        account = await create_account()
        response = await async_client.patch(
            f"/api/accounts/{account['id']}/goal", params={"goal": 500}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["goal"] == 500

    async def test_create_examples_is_idempotent(self, async_client, auth_headers):
        response = await async_client.post(
            "/api/accounts/create-example-accounts", headers=auth_headers
        )
        assert response.status_code == 201
        assert len(response.json()) == 3

        response = await async_client.post(
            "/api/accounts/create-example-accounts", headers=auth_headers
        )
        assert response.json() == []


class TestAccountState:
    async def test_deactivate_and_activate(self, async_client, auth_headers, create_account):
        account = await create_account()
        response = await async_client.patch(
            f"/api/accounts/{account['id']}/deactivate", headers=auth_headers
        )
        assert response.json()["type"] == "DEACTIVATED"

        response = await async_client.patch(
            f"/api/accounts/{account['id']}/activate", headers=auth_headers
        )
        assert response.json()["type"] == "ACTIVATED"

    async def test_delete_requires_zero_balance(self, async_client, auth_headers, create_account):
        account = await create_account(balance=10)
        response = await async_client.delete(
            f"/api/accounts/{account['id']}", headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Account balance must be zero to delete account!"

    async def test_delete_is_soft(self, async_client, auth_headers, create_account):
        account = await create_account()
        response = await async_client.delete(
            f"/api/accounts/{account['id']}", headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["type"] == "DELETED"

        response = await async_client.get("/api/accounts", headers=auth_headers)
        assert response.json() == []

        response = await async_client.get(
            "/api/accounts", params={"type": "DELETED"}, headers=auth_headers
        )
        assert [a["id"] for a in response.json()] == [account["id"]]

    async def test_deleted_account_is_final(self, async_client, auth_headers, create_account):
        account = await create_account()
        await async_client.delete(f"/api/accounts/{account['id']}", headers=auth_headers)

        response = await async_client.patch(
            f"/api/accounts/{account['id']}/activate", headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Account is deleted and cannot be activated!"

        response = await async_client.delete(
            f"/api/accounts/{account['id']}", headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Account has already been deleted!"

    async def test_balance_sum_counts_activated_only(
        self, async_client, auth_headers, create_account
    ):
        await create_account("Cash", balance=10)
        await create_account("Bank", balance=5.5)
        savings = await create_account("Savings", balance=100)
        await async_client.patch(f"/api/accounts/{savings['id']}/deactivate", headers=auth_headers)

        response = await async_client.get("/api/accounts/balance-sum", headers=auth_headers)
        assert response.json()["sum"] == 15.5


class TestBalanceSync:
    async def test_increase_books_income(self, async_client, auth_headers, create_account):
        account = await create_account(balance=10)
        response = await async_client.patch(
            f"/api/accounts/{account['id']}/balance", params={"balance": 25}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["balance"] == 25

        today = date.today().isoformat()
        response = await async_client.get(
            f"/api/accounts/{account['id']}/income-sum",
            params={"start_date": today, "end_date": today},
            headers=auth_headers,
        )
        assert response.json()["sum"] == 15

        response = await async_client.get(
            "/api/transactions", params={"type": "income"}, headers=auth_headers
        )
        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["description"] == "Account balance sync"

    async def test_decrease_books_expense(self, async_client, auth_headers, create_account):
        account = await create_account(balance=10)
        response = await async_client.patch(
            f"/api/accounts/{account['id']}/balance", params={"balance": 4}, headers=auth_headers
        )
        assert response.json()["balance"] == 4

        today = date.today().isoformat()
        response = await async_client.get(
            f"/api/accounts/{account['id']}/expense-sum",
            params={"start_date": today, "end_date": today},
            headers=auth_headers,
        )
        assert response.json()["sum"] == 6

    async def test_unchanged_balance_books_nothing(
        self, async_client, auth_headers, create_account
    ):
        account = await create_account(balance=10)
        await async_client.patch(
            f"/api/accounts/{account['id']}/balance", params={"balance": 10}, headers=auth_headers
        )
        response = await async_client.get("/api/transactions", headers=auth_headers)
        assert response.json()["total"] == 0
