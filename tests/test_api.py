"""
Tests for calculation API endpoints.
"""

import pytest

# Client fixture with a fixed 4.0 exchange rate is provided by conftest.py


class TestHealthEndpoint:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAcquisitionEndpoints:
    """Test acquisition cost endpoints."""

    def test_acquisition_cost(self, client):
        response = client.post(
            "/api/calculate/acquisition-cost",
            json={
                "price_without_vat": 250000,
                "vat_rate": 19,
                "bedroom_count": 3,
                "has_furniture": True,
                "has_real_estate_agent": True,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["price_with_vat"] == pytest.approx(297500)
        assert data["vat_amount"] == pytest.approx(47500)
        assert data["stamp_duty"] == pytest.approx(13200)
        assert data["furniture_cost"] == 0
        assert data["acquisition_costs"]["total"] == pytest.approx(12750)
        assert data["total_cost"] == pytest.approx(323450)

    def test_acquisition_cost_uses_default_vat(self, client):
        response = client.post(
            "/api/calculate/acquisition-cost", json={"price_without_vat": 100000}
        )
        assert response.status_code == 200
        assert response.json()["price_with_vat"] == pytest.approx(119000)

    @pytest.mark.parametrize("payload", [
        {"price_without_vat": -1},
        {"price_without_vat": 0},
        {"price_without_vat": 100000, "vat_rate": 150},
        {"price_without_vat": 100000, "vat_rate": -5},
        {"price_without_vat": 100000, "bedroom_count": -1},
    ])
    def test_out_of_range_inputs_rejected(self, client, payload):
        response = client.post("/api/calculate/acquisition-cost", json=payload)
        assert response.status_code == 422

    def test_stamp_duty(self, client):
        response = client.post(
            "/api/calculate/stamp-duty", json={"property_value": 170000}
        )
        assert response.status_code == 200
        assert response.json()["stamp_duty"] == pytest.approx(6800)

    def test_furniture_cost(self, client):
        response = client.post(
            "/api/calculate/furniture-cost", json={"bedroom_count": 6}
        )
        assert response.status_code == 200
        assert response.json()["furniture_cost"] == 30000

    @pytest.mark.parametrize("path,payload", [
        ("/api/calculate/furniture-cost", {"bedroom_count": 11}),
        ("/api/calculate/acquisition-cost", {"price_without_vat": 100000, "bedroom_count": 11}),
    ])
    def test_bedroom_count_capped_at_ten(self, client, path, payload):
        response = client.post(path, json=payload)
        assert response.status_code == 422


class TestYieldEndpoints:
    """Test yield and cash flow endpoints."""

    def test_yield(self, client):
        response = client.post(
            "/api/calculate/yield",
            json={"annual_rent": 12000, "total_investment": 200000},
        )
        assert response.status_code == 200
        assert response.json()["potential_yield"] == pytest.approx(6.0)

    def test_yield_zero_investment(self, client):
        response = client.post(
            "/api/calculate/yield",
            json={"annual_rent": 1000, "total_investment": 0},
        )
        assert response.status_code == 400
        assert "total_investment" in response.json()["detail"]

    def test_cash_flow(self, client):
        response = client.post(
            "/api/calculate/cash-flow",
            json={
                "monthly_rent": 1000,
                "monthly_mortgage_payment": 1100,
                "monthly_management_fee": 80,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["monthly_cash_flow"] == pytest.approx(-180)
        assert data["annual_cash_flow"] == pytest.approx(-2160)

    def test_return_on_equity_zero_equity(self, client):
        response = client.post(
            "/api/calculate/return-on-equity",
            json={"annual_cash_flow": 5000, "equity_amount": 0},
        )
        assert response.status_code == 400

    def test_future_rent_default_rate(self, client):
        response = client.post(
            "/api/calculate/future-rent", json={"current_rent": 1000}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["annual_increase_rate"] == 3
        assert data["future_rent"] == pytest.approx(1000 * 1.03 ** 5)


class TestMortgageEndpoints:
    """Test mortgage endpoints."""

    def test_mortgage(self, client):
        response = client.post(
            "/api/calculate/mortgage",
            json={"loan_amount": 120000, "annual_interest_rate": 0, "loan_term_years": 10},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["monthly_payment"] == pytest.approx(1000)
        assert data["total_interest"] == pytest.approx(0)
        assert data["number_of_payments"] == 120

    def test_mortgage_zero_term(self, client):
        response = client.post(
            "/api/calculate/mortgage",
            json={"loan_amount": 120000, "annual_interest_rate": 4, "loan_term_years": 0},
        )
        assert response.status_code == 422

    @pytest.mark.parametrize("path", ["/api/calculate/mortgage", "/api/calculate/amortization"])
    def test_loan_term_too_long(self, client, path):
        response = client.post(
            path,
            json={"loan_amount": 100000, "annual_interest_rate": 5, "loan_term_years": 20000},
        )
        assert response.status_code == 422

    def test_loan_term_upper_bound_accepted(self, client):
        response = client.post(
            "/api/calculate/mortgage",
            json={"loan_amount": 100000, "annual_interest_rate": 5, "loan_term_years": 50},
        )
        assert response.status_code == 200
        assert response.json()["number_of_payments"] == 600

    def test_amortization(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={
                "loan_amount": 100000,
                "annual_interest_rate": 6,
                "loan_term_years": 5,
                "start_date": "2025-01-01",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 60
        assert data["schedule"][0]["date"] == "2025-01-01"
        assert data["total_principal"] == pytest.approx(100000, abs=0.5)

    def test_optimal_mortgage_default_ltv(self, client):
        response = client.post(
            "/api/calculate/optimal-mortgage", json={"property_value": 250000}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["max_ltv"] == 60
        assert data["loan_amount"] == pytest.approx(150000)


class TestCurrencyEndpoint:
    """Test currency conversion endpoint."""

    def test_convert_with_settings_rate(self, client):
        response = client.post(
            "/api/calculate/convert",
            json={"amount": 1000, "from_currency": "EUR", "to_currency": "ILS"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["exchange_rate"] == 4.0
        assert data["converted_amount"] == pytest.approx(4000)
        assert data["formatted"] == "4,000 ₪"

    def test_convert_explicit_rate(self, client):
        response = client.post(
            "/api/calculate/convert",
            json={
                "amount": 395,
                "from_currency": "ILS",
                "to_currency": "EUR",
                "exchange_rate": 3.95,
            },
        )
        assert response.status_code == 200
        assert response.json()["formatted"] == "€100"

    def test_convert_invalid_rate(self, client):
        response = client.post(
            "/api/calculate/convert",
            json={
                "amount": 100,
                "from_currency": "EUR",
                "to_currency": "ILS",
                "exchange_rate": 0,
            },
        )
        assert response.status_code == 400

    def test_convert_unknown_currency(self, client):
        response = client.post(
            "/api/calculate/convert",
            json={"amount": 100, "from_currency": "USD", "to_currency": "ILS"},
        )
        assert response.status_code == 422


class TestAnalysisEndpoints:
    """Test property and financed investment analysis endpoints."""

    payload = {
        "price_without_vat": 250000,
        "bedroom_count": 3,
        "has_furniture": True,
        "expected_monthly_rent": 1500,
        "guaranteed_rent": 1200,
    }

    def test_property_analysis(self, client):
        response = client.post("/api/calculate/property-analysis", json=self.payload)
        assert response.status_code == 200
        data = response.json()
        assert data["acquisition"]["total_cost"] == pytest.approx(323450)
        assert data["total_cost_ils"] == pytest.approx(1293800)
        assert data["management_fees"] == pytest.approx(120)
        assert data["monthly_cash_flow"] == pytest.approx(1380)

    def test_financed_investment(self, client):
        response = client.post(
            "/api/calculate/financed-investment",
            json={
                **self.payload,
                "self_equity_ils": 800000,
                "annual_interest_rate": 0,
                "loan_term_years": 10,
                "mortgage_fee_rate": 1,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["loan_amount"] == pytest.approx(123450)
        assert data["mortgage"]["monthly_payment"] == pytest.approx(1028.75)
        assert data["monthly_cash_flow"] == pytest.approx(351.25)

    def test_financed_investment_zero_term(self, client):
        response = client.post(
            "/api/calculate/financed-investment",
            json={
                **self.payload,
                "self_equity_ils": 800000,
                "annual_interest_rate": 4,
                "loan_term_years": 0,
            },
        )
        assert response.status_code == 422


class TestNonFiniteInputs:
    """NaN and Infinity in request bodies are rejected before any calculation."""

    @pytest.mark.parametrize("path,body", [
        ("/api/calculate/yield", '{"annual_rent": 1000, "total_investment": NaN}'),
        ("/api/calculate/yield", '{"annual_rent": 1000, "total_investment": Infinity}'),
        ("/api/calculate/return-on-equity", '{"annual_cash_flow": 5000, "equity_amount": NaN}'),
        ("/api/calculate/cash-flow", '{"monthly_rent": Infinity}'),
        (
            "/api/calculate/convert",
            '{"amount": 100, "from_currency": "EUR", "to_currency": "ILS", "exchange_rate": NaN}',
        ),
        ("/api/calculate/acquisition-cost", '{"price_without_vat": Infinity}'),
    ])
    def test_non_finite_values_rejected(self, client, path, body):
        response = client.post(
            path, content=body, headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 422
        assert response.json()["detail"]

    def test_missing_field_with_nan_sibling(self, client):
        response = client.post(
            "/api/calculate/yield",
            content='{"annual_rent": NaN}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
