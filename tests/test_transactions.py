"""Tests for transaction endpoints and their effect on balances."""

from datetime import date, timedelta

import pytest

pytestmark = pytest.mark.asyncio

TODAY = date.today()


@pytest.fixture
def ledger(async_client, auth_headers):
    """Create a cash account, a bank account, an income and an expense category."""

    async def _ledger() -> dict[str, dict]:
        entities = {}
        for key, path, body in (
            ("cash", "/api/accounts", {"name": "Cash", "balance": 100}),
            ("bank", "/api/accounts", {"name": "Bank", "balance": 0}),
            ("salary", "/api/categories", {"name": "Salary", "type": "INCOME"}),
            ("food", "/api/categories", {"name": "Food", "type": "EXPENSES"}),
        ):
            response = await async_client.post(path, json=body, headers=auth_headers)
            assert response.status_code == 201, response.text
            entities[key] = response.json()
        return entities

    return _ledger


def transaction(source, source_type, target, target_type, amount, when=TODAY, **fields):
    return {
        "date_of_completion": when.isoformat(),
        "from_id": source["id"],
        "from_type": source_type,
        "to_id": target["id"],
        "to_type": target_type,
        "sum": amount,
        **fields,
    }


async def balance(client, headers, entity, path="/api/accounts"):
    response = await client.get(f"{path}/{entity['id']}", headers=headers)
    return response.json()


class TestExecution:
    async def test_income_credits_account(self, async_client, auth_headers, ledger):
        e = await ledger()
        response = await async_client.post(
            "/api/transactions",
            json=transaction(e["salary"], "CATEGORY", e["cash"], "ACCOUNT", 50),
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["kind"] == "INCOME"

        assert (await balance(async_client, auth_headers, e["cash"]))["balance"] == 150
        salary = await balance(async_client, auth_headers, e["salary"], "/api/categories")
        assert salary["current_period_sum"] == 50

    async def test_expense_debits_account(self, async_client, auth_headers, ledger):
        e = await ledger()
        response = await async_client.post(
            "/api/transactions",
            json=transaction(e["cash"], "ACCOUNT", e["food"], "CATEGORY", 30),
            headers=auth_headers,
        )
        assert response.json()["kind"] == "EXPENSE"

        assert (await balance(async_client, auth_headers, e["cash"]))["balance"] == 70
        food = await balance(async_client, auth_headers, e["food"], "/api/categories")
        assert food["current_period_sum"] == 30

    async def test_transfer_moves_money(self, async_client, auth_headers, ledger):
        e = await ledger()
        response = await async_client.post(
            "/api/transactions",
            json=transaction(e["cash"], "ACCOUNT", e["bank"], "ACCOUNT", 40),
            headers=auth_headers,
        )
        assert response.json()["kind"] == "TRANSFER"

        assert (await balance(async_client, auth_headers, e["cash"]))["balance"] == 60
        assert (await balance(async_client, auth_headers, e["bank"]))["balance"] == 40


class TestValidation:
    async def _rejected(self, client, headers, body):
        response = await client.post("/api/transactions", json=body, headers=headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Transaction contains invalid from-to data!"

    async def test_category_to_category(self, async_client, auth_headers, ledger):
        e = await ledger()
        await self._rejected(
            async_client,
            auth_headers,
            transaction(e["salary"], "CATEGORY", e["food"], "CATEGORY", 10),
        )

    async def test_income_from_expense_category(self, async_client, auth_headers, ledger):
        e = await ledger()
        await self._rejected(
            async_client,
            auth_headers,
            transaction(e["food"], "CATEGORY", e["cash"], "ACCOUNT", 10),
        )

    async def test_expense_to_income_category(self, async_client, auth_headers, ledger):
        e = await ledger()
        await self._rejected(
            async_client,
            auth_headers,
            transaction(e["cash"], "ACCOUNT", e["salary"], "CATEGORY", 10),
        )

    async def test_transfer_exceeding_balance(self, async_client, auth_headers, ledger):
        e = await ledger()
        await self._rejected(
            async_client,
            auth_headers,
            transaction(e["cash"], "ACCOUNT", e["bank"], "ACCOUNT", 100.01),
        )

    async def test_deactivated_account(self, async_client, auth_headers, ledger):
        e = await ledger()
        await async_client.patch(
            f"/api/accounts/{e['cash']['id']}/deactivate", headers=auth_headers
        )
        await self._rejected(
            async_client,
            auth_headers,
            transaction(e["cash"], "ACCOUNT", e["food"], "CATEGORY", 10),
        )

    async def test_other_users_account(
        self, async_client, auth_headers, ledger, user_factory, login
    ):
        e = await ledger()
        await user_factory(email="bob@example.com", name="Bob")
        bob_headers = await login("bob@example.com")
        response = await async_client.post(
            "/api/categories", json={"name": "Food", "type": "EXPENSES"}, headers=bob_headers
        )
        bob_food = response.json()
        await self._rejected(
            async_client,
            bob_headers,
            transaction(e["cash"], "ACCOUNT", bob_food, "CATEGORY", 10),
        )

    async def test_non_positive_sum(self, async_client, auth_headers, ledger):
        e = await ledger()
        response = await async_client.post(
            "/api/transactions",
            json=transaction(e["cash"], "ACCOUNT", e["food"], "CATEGORY", 0),
            headers=auth_headers,
        )
        assert response.status_code == 422


class TestUpdateAndDelete:
    async def test_update_replaces_effect(self, async_client, auth_headers, ledger):
        e = await ledger()
        response = await async_client.post(
            "/api/transactions",
            json=transaction(e["cash"], "ACCOUNT", e["food"], "CATEGORY", 30),
            headers=auth_headers,
        )
        transaction_id = response.json()["id"]

        response = await async_client.put(
            f"/api/transactions/{transaction_id}",
            json=transaction(e["cash"], "ACCOUNT", e["bank"], "ACCOUNT", 100),
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["kind"] == "TRANSFER"

        # The transfer is validated against the balance after undoing the expense
        assert (await balance(async_client, auth_headers, e["cash"]))["balance"] == 0
        assert (await balance(async_client, auth_headers, e["bank"]))["balance"] == 100
        food = await balance(async_client, auth_headers, e["food"], "/api/categories")
        assert food["current_period_sum"] == 0

    async def test_delete_reverses_effect(self, async_client, auth_headers, ledger):
        e = await ledger()
        response = await async_client.post(
            "/api/transactions",
            json=transaction(e["salary"], "CATEGORY", e["cash"], "ACCOUNT", 25),
            headers=auth_headers,
        )
        transaction_id = response.json()["id"]

        response = await async_client.delete(
            f"/api/transactions/{transaction_id}", headers=auth_headers
        )
        assert response.status_code == 204
        assert (await balance(async_client, auth_headers, e["cash"]))["balance"] == 100

        response = await async_client.get(
            f"/api/transactions/{transaction_id}", headers=auth_headers
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Transaction with this ID does not exist!"

    async def test_delete_after_category_removed(self, async_client, auth_headers, ledger):
        e = await ledger()
        response = await async_client.post(
            "/api/transactions",
            json=transaction(e["cash"], "ACCOUNT", e["food"], "CATEGORY", 10),
            headers=auth_headers,
        )
        transaction_id = response.json()["id"]
        await async_client.delete(f"/api/categories/{e['food']['id']}", headers=auth_headers)

        response = await async_client.delete(
            f"/api/transactions/{transaction_id}", headers=auth_headers
        )
        assert response.status_code == 204
        assert (await balance(async_client, auth_headers, e["cash"]))["balance"] == 100


class TestQueries:
    async def _book(self, client, headers, e):
        bodies = [
            transaction(e["salary"], "CATEGORY", e["cash"], "ACCOUNT", 200),
            transaction(e["cash"], "ACCOUNT", e["food"], "CATEGORY", 30),
            transaction(
                e["cash"], "ACCOUNT", e["food"], "CATEGORY", 12, when=TODAY - timedelta(days=40)
            ),
            transaction(e["cash"], "ACCOUNT", e["bank"], "ACCOUNT", 50),
        ]
        for body in bodies:
            response = await client.post("/api/transactions", json=body, headers=headers)
            assert response.status_code == 201, response.text

    async def test_list_and_filter_by_type(self, async_client, auth_headers, ledger):
        e = await ledger()
        await self._book(async_client, auth_headers, e)

        response = await async_client.get("/api/transactions", headers=auth_headers)
        assert response.json()["total"] == 4

        response = await async_client.get(
            "/api/transactions", params={"type": "Expense"}, headers=auth_headers
        )
        assert {t["kind"] for t in response.json()["items"]} == {"EXPENSE"}
        assert response.json()["total"] == 2

    async def test_unknown_type_rejected(self, async_client, auth_headers):
        response = await async_client.get(
            "/api/transactions", params={"type": "refund"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Transaction type is invalid!"

    async def test_sums(self, async_client, auth_headers, ledger):
        e = await ledger()
        await self._book(async_client, auth_headers, e)

        response = await async_client.get(
            "/api/transactions/total-sum", params={"type": "expense"}, headers=auth_headers
        )
        assert response.json()["sum"] == 42

        response = await async_client.get(
            "/api/transactions/total-sum-between-dates",
            params={
                "start_date": (TODAY - timedelta(days=7)).isoformat(),
                "end_date": TODAY.isoformat(),
                "type": "expense",
            },
            headers=auth_headers,
        )
        assert response.json()["sum"] == 30

    async def test_between_dates(self, async_client, auth_headers, ledger):
        e = await ledger()
        await self._book(async_client, auth_headers, e)

        response = await async_client.get(
            "/api/transactions/between-dates",
            params={
                "start_date": (TODAY - timedelta(days=60)).isoformat(),
                "end_date": (TODAY - timedelta(days=30)).isoformat(),
            },
            headers=auth_headers,
        )
        assert [t["sum"] for t in response.json()] == [12]

    async def test_by_from_and_to(self, async_client, auth_headers, ledger):
        e = await ledger()
        await self._book(async_client, auth_headers, e)

        response = await async_client.get(
            "/api/transactions/by-from-data",
            params={"from_id": e["cash"]["id"], "from_type": "ACCOUNT"},
            headers=auth_headers,
        )
        assert len(response.json()) == 3

        response = await async_client.get(
            "/api/transactions/by-to-data",
            params={"to_id": e["food"]["id"], "to_type": "CATEGORY"},
            headers=auth_headers,
        )
        assert sorted(t["sum"] for t in response.json()) == [12, 30]
