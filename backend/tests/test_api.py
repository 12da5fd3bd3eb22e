"""
API tests. The reference date is pinned to 2024-02-29 in conftest.
"""

RENT = {
    "type": "expense",
    "amount": 1200,
    "description": "Rent",
    "category_id": "7",
    "frequency": "monthly",
    "start_date": "2024-01-01",
    "day_of_month": 31,
    "notes": "Landlord",
}


def _create(client, payload=None):
    response = client.post("/api/recurring", json=payload or RENT)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestSystem:
    def test_health(self, client):
        response = client.get("/api/system/health")
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "healthy"


class TestRecurringApi:
    """Tests for the recurring transaction endpoints."""

    def test_create_returns_next_occurrence(self, client):
        data = _create(client)
        assert data["frequency"] == "monthly"
        assert data["next_occurrence"] == "2024-02-29"

    def test_validation_rejects_bad_definitions(self, client):
        cases = [
            {**RENT, "amount": 0},
            {**RENT, "description": "x"},
            {**RENT, "day_of_month": 32},
            {**RENT, "day_of_month": None},
            {**RENT, "frequency": "weekly", "day_of_month": None, "day_of_week": 7},
            {**RENT, "frequency": "fortnightly"},
            {**RENT, "end_date": "2023-12-31"},
            {**RENT, "category_id": ""},
            {k: v for k, v in RENT.items() if k != "category_id"},
        ]
        for payload in cases:
            response = client.post("/api/recurring", json=payload)
            assert response.status_code == 422, payload
            assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_list_includes_next_occurrence(self, client):
        _create(client)
        _create(client, {**RENT, "description": "Gym", "frequency": "weekly",
                         "day_of_month": None, "day_of_week": 1})

        response = client.get("/api/recurring")

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["total_count"] == 2
        next_dates = {i["description"]: i["next_occurrence"] for i in body["data"]}
        assert next_dates == {"Rent": "2024-02-29", "Gym": "2024-03-04"}

    def test_list_items_carry_schedule_fields(self, client):
        _create(client)

        item = client.get("/api/recurring").json()["data"][0]

        assert item["category_id"] == "7"
        assert item["day_of_month"] == 31
        assert item["day_of_week"] is None
        assert item["notes"] == "Landlord"

    def test_patch_updates_fields_and_next_occurrence(self, client):
        created = _create(client)

        response = client.patch(
            f"/api/recurring/{created['id']}", json={"amount": 1300, "day_of_month": 15}
        )

        assert response.status_code == 200, response.text
        data = response.json()["data"]
        assert data["amount"] == 1300
        assert data["description"] == "Rent"
        assert data["notes"] == "Landlord"
        assert data["next_occurrence"] == "2024-03-15"

    def test_put_clears_end_date(self, client):
        created = _create(client, {**RENT, "end_date": "2024-06-30"})

        response = client.put(f"/api/recurring/{created['id']}", json={"end_date": None})

        assert response.status_code == 200
        assert response.json()["data"]["end_date"] is None

    def test_update_rechecks_merged_definition(self, client):
        created = _create(client)
        cases = [
            {"frequency": "weekly"},
            {"end_date": "2023-12-01"},
            {"amount": None},
            {"description": "   a   "},
        ]
        for payload in cases:
            response = client.patch(f"/api/recurring/{created['id']}", json=payload)
            assert response.status_code == 422, payload
            assert response.json()["error"]["code"] == "VALIDATION_ERROR"

        unchanged = client.get(f"/api/recurring/{created['id']}").json()["data"]
        assert unchanged["frequency"] == "monthly"
        assert unchanged["end_date"] is None

    def test_update_missing(self, client):
        response = client.patch(
            "/api/recurring/00000000-0000-0000-0000-000000000000", json={"amount": 5}
        )
        assert response.status_code == 404

    def test_toggle(self, client):
        created = _create(client)
        response = client.post(f"/api/recurring/{created['id']}/toggle")
        data = response.json()["data"]
        assert data["is_active"] is False
        assert data["next_occurrence"] is None

    def test_get_missing(self, client):
        response = client.get("/api/recurring/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "RECURRINGTRANSACTION_NOT_FOUND"

    def test_generate_is_idempotent(self, client):
        _create(client)

        first = client.post("/api/recurring/generate").json()["data"]
        second = client.post("/api/recurring/generate").json()["data"]

        assert first["run_date"] == "2024-02-29"
        assert first["generated"] == 1
        assert first["failed"] == 0
        assert second["generated"] == 0

    def test_generate_for_explicit_date(self, client):
        _create(client)
        data = client.post("/api/recurring/generate", params={"on": "2024-02-28"}).json()["data"]
        assert data["generated"] == 0

    def test_generate_skips_inactive(self, client):
        created = _create(client)
        client.post(f"/api/recurring/{created['id']}/toggle")
        data = client.post("/api/recurring/generate").json()["data"]
        assert data["generated"] == 0

    def test_delete(self, client):
        created = _create(client)
        response = client.delete(f"/api/recurring/{created['id']}")
        assert response.status_code == 200
        assert client.get(f"/api/recurring/{created['id']}").status_code == 404


GROCERIES = {
    "type": "expense",
    "amount": 85,
    "description": "Groceries",
    "category_id": "1",
    "date": "2024-02-10",
}


def _add_transaction(client, **overrides):
    response = client.post("/api/transactions", json={**GROCERIES, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestTransactionsApi:
    """Tests for the manual ledger endpoints."""

    def test_create_and_get(self, client):
        created = _add_transaction(client, notes="Weekly shop")

        assert created["recurring_id"] is None
        fetched = client.get(f"/api/transactions/{created['id']}").json()["data"]
        assert fetched["description"] == "Groceries"
        assert fetched["notes"] == "Weekly shop"

    def test_validation(self, client):
        cases = [
            {k: v for k, v in GROCERIES.items() if k != "category_id"},
            {**GROCERIES, "amount": -5},
            {**GROCERIES, "amount": 1_000_000},
            {**GROCERIES, "description": " x "},
            {**GROCERIES, "date": "2025-06-01"},
            {**GROCERIES, "date": "2022-12-31"},
        ]
        for payload in cases:
            response = client.post("/api/transactions", json=payload)
            assert response.status_code == 422, payload
            assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_list_filters(self, client):
        _add_transaction(client)
        _add_transaction(client, type="income", amount=2500, description="Salary",
                         category_id="9", date="2024-02-01")
        _add_transaction(client, amount=12, description="Taxi home", category_id="2",
                         date="2024-01-15")

        def descriptions(**params):
            body = client.get("/api/transactions", params=params).json()
            return [t["description"] for t in body["data"]]

        assert descriptions() == ["Groceries", "Salary", "Taxi home"]
        assert descriptions(type="expense") == ["Groceries", "Taxi home"]
        assert descriptions(category_id="9") == ["Salary"]
        assert descriptions(date_from="2024-02-01", date_to="2024-02-29") == ["Groceries", "Salary"]
        assert descriptions(search="taxi") == ["Taxi home"]

    def test_list_paginates(self, client):
        _add_transaction(client)
        _add_transaction(client, description="Bakery", date="2024-02-11")

        body = client.get("/api/transactions", params={"page_size": 1}).json()

        assert [t["description"] for t in body["data"]] == ["Bakery"]
        assert body["meta"]["total_count"] == 2
        assert body["meta"]["has_next"] is True

    def test_list_generated_by_definition(self, client):
        created = _create(client)
        client.post("/api/recurring/generate")
        _add_transaction(client)

        body = client.get("/api/transactions", params={"recurring_id": created["id"]}).json()

        assert [(t["description"], t["date"]) for t in body["data"]] == [
            ("Rent (Auto)", "2024-02-29")
        ]

    def test_summary(self, client):
        _add_transaction(client)
        _add_transaction(client, type="income", amount=2500, description="Salary",
                         category_id="9", date="2024-02-01")

        totals = client.get("/api/transactions/summary").json()["data"]

        assert totals == {"income": 2500.0, "expense": 85.0, "balance": 2415.0, "count": 2}

    def test_patch(self, client):
        created = _add_transaction(client)

        response = client.patch(f"/api/transactions/{created['id']}", json={"amount": 90.5})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["amount"] == 90.5
        assert data["description"] == "Groceries"

    def test_update_rejects_far_dates(self, client):
        created = _add_transaction(client)
        response = client.put(f"/api/transactions/{created['id']}", json={"date": "2026-01-01"})
        assert response.status_code == 422

    def test_moving_generated_onto_taken_date_conflicts(self, client):
        created = _create(client)
        client.post("/api/recurring/generate")
        client.post("/api/recurring/generate", params={"on": "2024-01-31"})
        rows = client.get("/api/transactions", params={"recurring_id": created["id"]}).json()["data"]
        assert [r["date"] for r in rows] == ["2024-02-29", "2024-01-31"]

        response = client.patch(f"/api/transactions/{rows[1]['id']}", json={"date": "2024-02-29"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_delete(self, client):
        created = _add_transaction(client)

        assert client.delete(f"/api/transactions/{created['id']}").status_code == 200

        response = client.get(f"/api/transactions/{created['id']}")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TRANSACTION_NOT_FOUND"


class TestCategoriesApi:
    def test_defaults_are_seeded(self, client):
        categories = client.get("/api/categories").json()["data"]

        assert len(categories) == 13
        assert {c["id"]: c["name"] for c in categories}["7"] == "Housing"
        assert all(c["is_system"] for c in categories)

    def test_filter_by_type(self, client):
        categories = client.get("/api/categories", params={"type": "income"}).json()["data"]
        assert [c["name"] for c in categories] == ["Business", "Investment", "Other Income", "Salary"]

    def test_create_and_conflict(self, client):
        response = client.post("/api/categories", json={"name": "Pets", "color": "#a1b2c3"})
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["type"] == "expense"
        assert data["is_system"] is False

        duplicate = client.post("/api/categories", json={"name": "Pets"})
        assert duplicate.status_code == 409

    def test_rejects_bad_color(self, client):
        response = client.post("/api/categories", json={"name": "Pets", "color": "red"})
        assert response.status_code == 422

    def test_update(self, client):
        response = client.patch("/api/categories/7", json={"color": "#000000"})
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Housing"
        assert response.json()["data"]["color"] == "#000000"

        rename = client.put("/api/categories/7", json={"name": "Salary"})
        assert rename.status_code == 409

    def test_delete_keeps_transactions(self, client):
        _add_transaction(client, category_id="4", description="Shoes")

        assert client.delete("/api/categories/4").status_code == 200

        missing = client.get("/api/categories/4")
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "CATEGORY_NOT_FOUND"
        rows = client.get("/api/transactions", params={"category_id": "4"}).json()["data"]
        assert [r["description"] for r in rows] == ["Shoes"]


class TestBudgetsApi:
    def test_progress_includes_generated_expenses(self, client):
        _create(client)
        client.post("/api/recurring/generate")
        budget = client.post("/api/budgets", json={"category_id": "7", "amount": 1400})
        assert budget.status_code == 201

        progress = client.get("/api/budgets/progress").json()["data"]

        assert len(progress) == 1
        assert progress[0]["spent"] == 1200
        assert progress[0]["is_near_limit"] is True

    def test_progress_includes_manual_expenses(self, client):
        _add_transaction(client)
        _add_transaction(client, amount=40, date="2024-01-20")
        _add_transaction(client, type="income", amount=500, description="Refund")
        client.post("/api/budgets", json={"category_id": "1", "amount": 100})

        progress = client.get("/api/budgets/progress").json()["data"]

        assert progress[0]["spent"] == 85
        assert progress[0]["percentage"] == 85.0
        assert progress[0]["is_near_limit"] is True
        assert progress[0]["is_over_budget"] is False

    def test_duplicate_category_conflicts(self, client):
        client.post("/api/budgets", json={"category_id": "7", "amount": 100})
        response = client.post("/api/budgets", json={"category_id": "7", "amount": 200})
        assert response.status_code == 409

    def test_update(self, client):
        housing = client.post("/api/budgets", json={"category_id": "7", "amount": 100}).json()["data"]
        food = client.post("/api/budgets", json={"category_id": "1", "amount": 50}).json()["data"]

        response = client.patch(f"/api/budgets/{housing['id']}", json={"amount": 300})
        assert response.status_code == 200
        assert response.json()["data"]["amount"] == 300
        assert response.json()["data"]["category_id"] == "7"

        moved = client.put(f"/api/budgets/{food['id']}", json={"category_id": "7"})
        assert moved.status_code == 409

    def test_update_missing(self, client):
        response = client.put(
            "/api/budgets/00000000-0000-0000-0000-000000000000", json={"amount": 10}
        )
        assert response.status_code == 404


VACATION = {
    "name": "Vacation",
    "target_amount": 1000,
    "current_amount": 400,
    "target_date": "2024-03-20",
    "category": "vacation",
}


class TestGoalsApi:
    def test_create_and_list(self, client):
        response = client.post("/api/goals", json=VACATION)
        assert response.status_code == 201
        assert response.json()["data"]["status"] == "urgent"

        goals = client.get("/api/goals").json()["data"]
        assert goals[0]["progress"] == 40.0
        assert goals[0]["days_remaining"] == 20

    def test_current_cannot_exceed_target(self, client):
        response = client.post(
            "/api/goals",
            json={"name": "Car", "target_amount": 100, "current_amount": 200,
                  "target_date": "2025-01-01"},
        )
        assert response.status_code == 422

    def test_name_length(self, client):
        response = client.post("/api/goals", json={**VACATION, "name": "V"})
        assert response.status_code == 422

    def test_update(self, client):
        goal = client.post("/api/goals", json=VACATION).json()["data"]

        response = client.patch(f"/api/goals/{goal['id']}", json={"target_amount": 2000})

        assert response.status_code == 200
        assert response.json()["data"]["progress"] == 20.0
        assert response.json()["data"]["name"] == "Vacation"

    def test_update_rechecks_amounts(self, client):
        goal = client.post("/api/goals", json=VACATION).json()["data"]

        lowered = client.put(f"/api/goals/{goal['id']}", json={"target_amount": 300})
        raised = client.patch(f"/api/goals/{goal['id']}", json={"current_amount": 5000})

        assert lowered.status_code == 422
        assert raised.status_code == 422
        assert raised.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_contribute_books_savings_expense(self, client):
        goal = client.post("/api/goals", json=VACATION).json()["data"]

        response = client.post(f"/api/goals/{goal['id']}/contribute", json={"amount": 100})

        assert response.status_code == 200
        assert response.json()["data"]["current_amount"] == 500
        assert response.json()["data"]["progress"] == 50.0
        rows = client.get("/api/transactions", params={"category_id": "13"}).json()["data"]
        assert [(r["description"], r["amount"], r["date"], r["type"]) for r in rows] == [
            ("Contribution to Vacation", 100, "2024-02-29", "expense")
        ]

    def test_contribute_without_ledger_entry(self, client):
        goal = client.post("/api/goals", json=VACATION).json()["data"]

        client.post(
            f"/api/goals/{goal['id']}/contribute",
            json={"amount": 600, "record_transaction": False},
        )

        assert client.get("/api/goals").json()["data"][0]["status"] == "completed"
        assert client.get("/api/transactions").json()["meta"]["total_count"] == 0

    def test_contribute_validation(self, client):
        goal = client.post("/api/goals", json=VACATION).json()["data"]

        assert client.post(f"/api/goals/{goal['id']}/contribute", json={"amount": 0}).status_code == 422
        missing = client.post(
            "/api/goals/00000000-0000-0000-0000-000000000000/contribute", json={"amount": 5}
        )
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "GOAL_NOT_FOUND"
