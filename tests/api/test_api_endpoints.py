"""API endpoint tests.

Tests the FastAPI endpoints for budgets, invoices and formatting.
"""

from collections.abc import AsyncGenerator
from dataclasses import replace
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from workforce_billing.api.app import create_app
from workforce_billing.api.dependencies import get_app_settings, get_now

pytestmark = pytest.mark.asyncio


SALARY_PAYLOAD = {
    "worker_id": "worker-1",
    "worker_name": "Ravi Kumar",
    "period_from": "2024-05-01",
    "period_to": "2024-05-31",
    "worker": {"salary_type": "daily", "salary_daily": "800", "overtime_rate": "120"},
    "attendance": {
        "working_days_in_period": 27,
        "present_days": "20",
        "absent_days": 7,
        "overtime_hours": "5",
    },
    "deductions": "300",
    "deduction_notes": "Tools",
}


class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Health endpoint should return 200."""
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "test"
        assert "timestamp" in data

    async def test_readiness_check(self, client: AsyncClient):
        """Readiness endpoint should return 200."""
        response = await client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    async def test_liveness_check(self, client: AsyncClient):
        """Liveness endpoint should return 200."""
        response = await client.get("/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"


class TestProjectEstimate:
    """Test budget estimate endpoint."""

    async def test_daily_estimate(self, client: AsyncClient):
        """POST /api/v1/projects/estimate prices a daily schedule."""
        response = await client.post(
            "/api/v1/projects/estimate",
            json={
                "payment_type": "daily",
                "rate": "500",
                "start_date": "2024-01-01",
                "end_date": "2024-01-14",
                "working_days_per_week": 6,
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["working_days"] == 12
        assert data["total_days"] == 14
        assert data["estimated_total"] == "6000.00"
        assert data["is_submittable"] is True

    async def test_incomplete_estimate(self, client: AsyncClient):
        """An incomplete schedule estimates to zero rather than failing."""
        response = await client.post("/api/v1/projects/estimate", json={"payment_type": "weekly"})
        assert response.status_code == 200

        data = response.json()
        assert data["estimated_total"] == "0.00"
        assert data["missing"] == ["rate", "dates"]
        assert data["is_submittable"] is False


class TestProjectInvoices:
    """Test project invoice endpoints."""

    async def test_totals(self, client: AsyncClient):
        """Totals are recomputed from the items."""
        response = await client.post(
            "/api/v1/invoices/project/totals",
            json={
                "items": [{"description": "Labour", "quantity": "2", "rate": "150.005"}],
                "paid_amount": "100",
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["items"][0]["amount"] == "300.01"
        assert data["total_amount"] == "300.01"
        assert data["balance_amount"] == "200.01"

    async def test_validate_valid_invoice(self, client: AsyncClient):
        """A valid form returns the priced draft invoice."""
        response = await client.post(
            "/api/v1/invoices/project/validate",
            json={
                "invoice_date": "2024-06-01",
                "due_date": "2024-06-08",
                "project_id": "proj-1",
                "client_name": "Acme Builders",
                "items": [{"description": "Labour", "quantity": "1", "rate": "16300"}],
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "draft"
        assert data["total_amount"] == "16300.00"

    async def test_validate_rejects_overpayment(self, client: AsyncClient):
        """All violations are returned with a 400."""
        response = await client.post(
            "/api/v1/invoices/project/validate",
            json={
                "invoice_date": "2024-06-01",
                "due_date": "2024-06-08",
                "client_name": "Acme Builders",
                "items": [{"description": "Labour", "quantity": "1", "rate": "16300"}],
                "paid_amount": "20000",
            },
        )
        assert response.status_code == 400

        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["errors"] == ["Paid amount cannot exceed total amount"]


class TestSalaryInvoices:
    """Test salary endpoints."""

    async def test_calculate(self, client: AsyncClient):
        """POST /api/v1/invoices/salary/calculate returns the breakdown."""
        response = await client.post("/api/v1/invoices/salary/calculate", json=SALARY_PAYLOAD)
        assert response.status_code == 200

        data = response.json()
        assert data["base_salary_amount"] == "16000.00"
        assert data["overtime_amount"] == "600.00"
        assert data["gross_salary"] == "16600.00"
        assert data["net_pay"] == "16300.00"

    async def test_monthly_worker_rates(self, client: AsyncClient):
        """Monthly salaries are spread over working days per month."""
        payload = {
            **SALARY_PAYLOAD,
            "worker": {"salary_type": "monthly", "salary_monthly": "26000", "hourly_rate": "125"},
            "deductions": None,
        }
        response = await client.post("/api/v1/invoices/salary/calculate", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["base_salary_rate"] == "1000.00"
        assert data["overtime_rate"] == "187.50"
        assert data["gross_salary"] == "20937.50"

    async def test_calculate_rejects_long_period(self, client: AsyncClient):
        """Periods over 31 days are rejected."""
        payload = {**SALARY_PAYLOAD, "period_from": "2024-02-01", "period_to": "2024-03-10"}
        response = await client.post("/api/v1/invoices/salary/calculate", json=payload)
        assert response.status_code == 400
        assert response.json()["errors"] == ["Salary period cannot exceed 31 days"]

    async def test_generate(self, client: AsyncClient):
        """Generation returns a sent invoice."""
        response = await client.post("/api/v1/invoices/salary/generate", json=SALARY_PAYLOAD)
        assert response.status_code == 201

        data = response.json()
        assert data["invoice_type"] == "salary"
        assert data["status"] == "sent"
        assert data["invoice_date"] == "2024-06-15"
        assert data["due_date"] == "2024-06-22"
        assert data["total_amount"] == "16300.00"
        assert data["salary_breakdown"]["deduction_notes"] == "Tools"

    async def test_generate_rejects_excess_deductions(self, client: AsyncClient):
        """Deductions above gross are rejected."""
        payload = {**SALARY_PAYLOAD, "deductions": "17000"}
        response = await client.post("/api/v1/invoices/salary/generate", json=payload)
        assert response.status_code == 400
        assert response.json()["errors"] == ["Deductions cannot exceed gross salary"]

    async def test_periods(self, client: AsyncClient):
        """Suggested periods are relative to the current date."""
        response = await client.get("/api/v1/invoices/salary/periods")
        assert response.status_code == 200

        data = response.json()
        assert [p["label"] for p in data] == ["Current Month", "Last Month", "Last 30 Days"]
        assert data[1] == {
            "label": "Last Month",
            "period_from": "2024-05-01",
            "period_to": "2024-05-31",
        }

    async def test_missing_worker(self, client: AsyncClient):
        """Worker is required."""
        payload = {**SALARY_PAYLOAD, "worker_id": None}
        response = await client.post("/api/v1/invoices/salary/generate", json=payload)
        assert response.status_code == 400
        assert "Worker selection is required" in response.json()["errors"]

    async def test_generate_reports_all_errors(self, client: AsyncClient):
        """A missing worker and negative deductions are reported together."""
        payload = {**SALARY_PAYLOAD, "worker_id": None, "deductions": "-5"}
        response = await client.post("/api/v1/invoices/salary/generate", json=payload)
        assert response.status_code == 400
        assert response.json()["errors"] == [
            "Worker selection is required",
            "Deductions cannot be negative",
        ]

    async def test_generate_rejects_excess_itemised_deductions(self, client: AsyncClient):
        """Advances larger than gross are rejected instead of capped."""
        payload = {**SALARY_PAYLOAD, "deductions": None, "deduction_items": {"advances": "50000"}}
        response = await client.post("/api/v1/invoices/salary/generate", json=payload)
        assert response.status_code == 400
        assert response.json()["errors"] == ["Deductions cannot exceed gross salary"]


class TestWorkspaceDefaults:
    """Test endpoints driven by the configured defaults."""

    @pytest_asyncio.fixture
    async def kolkata_client(self, app_settings) -> AsyncGenerator[AsyncClient, None]:
        """Client for a Kolkata deployment with ten-hour working days."""
        settings = replace(
            app_settings, default_timezone="Asia/Kolkata", default_working_hours_per_day=10
        )
        app = create_app()
        app.dependency_overrides[get_app_settings] = lambda: settings
        app.dependency_overrides[get_now] = lambda: datetime(2024, 6, 30, 20, 0, tzinfo=timezone.utc)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    async def test_periods_use_local_date(self, kolkata_client: AsyncClient):
        """20:00 UTC on June 30 is already July 1 in Kolkata."""
        response = await kolkata_client.get("/api/v1/invoices/salary/periods")
        assert response.status_code == 200
        assert response.json()[0] == {
            "label": "Current Month",
            "period_from": "2024-07-01",
            "period_to": "2024-07-01",
        }

    async def test_overtime_from_default_working_hours(self, kolkata_client: AsyncClient):
        """Without hourly or overtime rates, the configured working day sets overtime."""
        payload = {**SALARY_PAYLOAD, "worker": {"salary_type": "daily", "salary_daily": "800"}}
        response = await kolkata_client.post("/api/v1/invoices/salary/calculate", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["overtime_rate"] == "120.00"
        assert data["overtime_amount"] == "600.00"

    async def test_worker_hours_override_default(self, kolkata_client: AsyncClient):
        """A worker's own working hours take precedence."""
        payload = {
            **SALARY_PAYLOAD,
            "worker": {"salary_type": "daily", "salary_daily": "800", "working_hours_per_day": 8},
        }
        response = await kolkata_client.post("/api/v1/invoices/salary/calculate", json=payload)
        assert response.status_code == 200
        assert response.json()["overtime_rate"] == "150.00"


class TestFormatting:
    """Test formatting endpoint."""

    async def test_defaults(self, client: AsyncClient):
        """Server defaults apply when no settings are given."""
        response = await client.post(
            "/api/v1/format",
            json={"amount": "1234.5", "value": "2024-03-05T20:00:00Z"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["money"] == "$ 1,234.50"
        assert data["date_display"] == "2024-03-05"
        assert data["time_display"] == "20:00"
        assert data["datetime_display"] == "2024-03-05 20:00"

    async def test_workspace_settings(self, client: AsyncClient):
        """Stored workspace settings override the defaults."""
        response = await client.post(
            "/api/v1/format",
            json={
                "settings": {
                    "currency": {"code": "EUR", "symbol": "€", "position": "suffix"},
                    "dateTime": {
                        "timezone": "Asia/Kolkata",
                        "dateFormat": "DD-MM-YYYY",
                        "timeFormat": "12h",
                    },
                },
                "amount": 99.995,
                "value": "2024-03-05T20:00:00Z",
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["money"] == "100.00 €"
        assert data["datetime_display"] == "06-03-2024 01:30 AM"

    async def test_huge_amount(self, client: AsyncClient):
        """Amounts past the default decimal precision still format."""
        response = await client.post("/api/v1/format", json={"amount": 1e30})
        assert response.status_code == 200
        assert response.json()["money"] == "$ 1" + ",000" * 10 + ".00"

    async def test_bad_values(self, client: AsyncClient):
        """Unformattable values render as a placeholder."""
        response = await client.post("/api/v1/format", json={"amount": "abc"})
        assert response.status_code == 200
        assert response.json()["money"] == "-"
        assert response.json()["date_display"] == "-"
