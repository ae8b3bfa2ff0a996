from fastapi.testclient import TestClient

from optica.main import app


def test_quote_with_empty_body_reports_root_issue():
    client = TestClient(app)

    response = client.post("/api/v1/lenses/quote", content=b"", headers={"content-type": "application/json"})

    assert response.status_code == 400
    data = response.json()["error"]
    assert data["code"] == "VALIDATION_ERROR"
    assert data["message"] == "Validation failed"
    assert data["details"]["issues"]


def test_quote_with_non_finite_sphere_is_rejected():
    client = TestClient(app)
    body = (
        b'{"prescription": {"od": {"sphere": NaN, "cylinder": 0}, '
        b'"oi": {"sphere": 0, "cylinder": 0}}, "filters": {"frameType": "cerrado"}}'
    )

    response = client.post("/api/v1/lenses/quote", content=body, headers={"content-type": "application/json"})

    assert response.status_code == 400
    fields = [i["field"] for i in response.json()["error"]["details"]["issues"]]
    assert "prescription.od.sphere" in fields
