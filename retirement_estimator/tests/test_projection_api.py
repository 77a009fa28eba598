from __future__ import annotations

from copy import deepcopy

from flask.testing import FlaskClient

from retirement_estimator.app import create_app
from retirement_estimator.config import RiskThresholds, Settings


def projection_payload() -> dict:
    return {
        "currentAge": 30,
        "retirementAge": 65,
        "yearsInRetirement": 25,
        "currentIncome": 70000,
        "currentSavings": 50000,
        "annualContribution": 6000,
        "incomeReplacementRatio": 0.7,
        "cppBenefit": 1433,
        "oasBenefit": 727.67,
        "preRetirementReturn": 0.065,
        "retirementReturn": 0.045,
        "incomeGrowthRate": 0.02,
        "inflationRate": 0.025,
    }


def form_payload() -> dict:
    return {
        "currentAge": 30,
        "retirementAge": 65,
        "annualIncome": 70000,
        "province": "ON",
        "savings": [{"type": "rrsp", "amount": 50000}],
        "monthlyContributions": [{"type": "tfsa", "amount": 500}],
        "expectedReturnType": "balanced",
        "retirementLifestyle": "balanced",
    }


def test_projection_endpoint_returns_result_and_summary(client: FlaskClient):
    resp = client.post("/api/projection", json=projection_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    result = body["result"]
    assert len(result["accumulationTrajectory"]) == 35
    assert len(result["decumulationTrajectory"]) == 25
    assert result["riskLevel"] in {"SAFE", "MODERATE", "HIGH_RISK"}
    assert (result["depletionAge"] is None) == result["fundsLastThroughRetirement"]
    assert body["summary"]["indicatorColor"] in {"green", "yellow", "red"}


def test_invalid_age_range_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload["retirementAge"] = 30

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422
    assert any("retirementAge" in message for message in resp.get_json()["error"])


def test_invalid_horizon_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload["yearsInRetirement"] = 0

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422


def test_malformed_payload_returns_400(client: FlaskClient):
    resp = client.post("/api/projection", json={"retirementAge": 65})

    assert resp.status_code == 400
    assert "detail" in resp.get_json()


def test_unknown_field_returns_400(client: FlaskClient):
    payload = projection_payload()
    payload["taxRate"] = 0.2

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 400


def test_negative_current_age_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload["currentAge"] = -5

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422
    assert any("currentAge" in message for message in resp.get_json()["error"])


def test_oversized_horizon_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload["yearsInRetirement"] = 40000

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422
    assert any("yearsInRetirement" in message for message in resp.get_json()["error"])


def test_oversized_retirement_age_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload["retirementAge"] = 40000

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422


def test_overflowing_growth_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload.update(currentAge=0, retirementAge=120, incomeGrowthRate=1000)

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422
    assert any("incomeGrowthRate" in message for message in resp.get_json()["error"])


def test_missing_assumption_returns_400(client: FlaskClient):
    payload = projection_payload()
    del payload["inflationRate"]

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 400
    assert "detail" in resp.get_json()


def test_preview_waits_for_mandatory_fields(client: FlaskClient):
    resp = client.post("/api/projection/preview", json={"currentAge": 30})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ready"] is False
    assert "retirementAge is required" in body["missing"]
    assert "annualIncome is required" in body["missing"]
    assert body["result"] is None


def test_preview_and_final_results_agree(client: FlaskClient):
    preview = client.post("/api/projection/preview", json=form_payload())
    final = client.post("/api/projection/from-form", json=form_payload())

    assert preview.status_code == 200
    assert final.status_code == 200
    preview_body = preview.get_json()
    assert preview_body["ready"] is True
    assert preview_body["input"]["annualContribution"] == 6000.0
    assert preview_body["input"]["incomeReplacementRatio"] == 0.7
    assert preview_body["result"] == final.get_json()["result"]


def test_incomplete_form_cannot_produce_final_results(client: FlaskClient):
    payload = deepcopy(form_payload())
    del payload["annualIncome"]

    resp = client.post("/api/projection/from-form", json=payload)

    assert resp.status_code == 422
    assert "annualIncome is required" in resp.get_json()["error"]


def test_configured_thresholds_drive_the_risk_level():
    payload = {
        "currentAge": 64,
        "retirementAge": 65,
        "yearsInRetirement": 1,
        "currentIncome": 50000,
        "currentSavings": 1000000,
        "annualContribution": 0,
        "incomeReplacementRatio": 1.0,
        "cppBenefit": 0,
        "oasBenefit": 0,
        "preRetirementReturn": 0.0,
        "retirementReturn": 0.05,
        "incomeGrowthRate": 0.0,
        "inflationRate": 0.0,
    }
    strict = create_app(Settings(risk_thresholds=RiskThresholds(safe_max=0.03, moderate_max=0.045)))
    lenient = create_app(Settings())

    with strict.test_client() as client:
        strict_level = client.post("/api/projection", json=payload).get_json()["result"]["riskLevel"]
    with lenient.test_client() as client:
        lenient_level = client.post("/api/projection", json=payload).get_json()["result"]["riskLevel"]

    assert strict_level == "HIGH_RISK"
    assert lenient_level == "MODERATE"
