from __future__ import annotations

from math import isclose

from flask.testing import FlaskClient

from million_planner.app import create_app
from million_planner.config import Settings


def projection_payload(**overrides) -> dict:
    payload = {
        "mode": "contribution",
        "initialBalance": 15000,
        "rate": 8,
        "rateType": "annual",
        "value": 10,
        "periodType": "years",
    }
    payload.update(overrides)
    return payload


def test_contribution_mode_returns_breakdown(client: FlaskClient):
    resp = client.post("/api/projection", json=projection_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["mode"] == "contribution"
    assert body["status"] == "solved"
    assert body["solvedMonths"] is None
    assert 1000 < body["solvedContribution"] < 10000

    checkpoints = body["yearlyCheckpoints"]
    assert len(checkpoints) == 10
    assert set(checkpoints[0]) == {
        "year",
        "investedAmount",
        "interestCumulative",
        "totalInvested",
        "totalInterest",
        "totalAccumulated",
        "goal",
    }
    assert checkpoints[-1]["totalAccumulated"] == body["totalBalance"]
    assert checkpoints[-1]["goal"] == 1000000.0


def test_time_mode_returns_exact_months(client: FlaskClient):
    resp = client.post(
        "/api/projection",
        json=projection_payload(mode="time", initialBalance=0, rate=0, value=2000),
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["solvedMonths"] == 500
    assert body["solvedContribution"] is None
    assert isclose(body["totalBalance"], 1000000.0, abs_tol=0.01)


def test_unreachable_goal_is_reported(client: FlaskClient):
    resp = client.post(
        "/api/projection",
        json=projection_payload(mode="time", initialBalance=1000, rate=0, value=0),
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "unreachable"
    assert body["solvedMonths"] == 0
    assert body["yearlyCheckpoints"] == []


def test_monthly_rate_and_months_period(client: FlaskClient):
    resp = client.post(
        "/api/projection",
        json=projection_payload(rate=1, rateType="monthly", value=18, periodType="months"),
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["monthlyRate"] == 0.01
    assert body["simulatedMonths"] == 18


def test_configured_cap_truncates_simulation():
    app = create_app(Settings(max_months=24))
    with app.test_client() as client:
        resp = client.post(
            "/api/projection",
            json=projection_payload(mode="time", initialBalance=0, rate=0, value=1),
        )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["truncated"] is True
    assert body["simulatedMonths"] == 24


def test_invalid_payloads_return_422(client: FlaskClient):
    bad_payloads = [
        {"mode": "contribution"},
        projection_payload(mode="weekly"),
        projection_payload(initialBalance=-1),
        projection_payload(initialBalance=1e306),
        projection_payload(mode="time", value=1e306),
        projection_payload(rate=-100),
        projection_payload(value=0),
        projection_payload(value=600),  # 7200 months
        projection_payload(rateType="daily"),
        projection_payload(currency="BRL"),
    ]

    for payload in bad_payloads:
        resp = client.post("/api/projection", json=payload)
        assert resp.status_code == 422, payload
        assert "detail" in resp.get_json()


def test_zero_contribution_is_valid_in_time_mode(client: FlaskClient):
    resp = client.post("/api/projection", json=projection_payload(mode="time", value=0))

    assert resp.status_code == 200


def test_malformed_json_returns_400(client: FlaskClient):
    resp = client.post("/api/projection", data="{not json", content_type="application/json")

    assert resp.status_code == 400
    assert "detail" in resp.get_json()


def test_explosive_growth_returns_a_result_not_a_server_error(client: FlaskClient):
    resp = client.post(
        "/api/projection",
        json=projection_payload(rate=20, rateType="monthly", value=500, periodType="years"),
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "goal_met"
    assert body["solvedContribution"] == 0
    assert body["truncated"] is True
    assert body["totalBalance"] < 1e15
