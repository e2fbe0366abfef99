from __future__ import annotations

from expense_summary.webapp import create_app


def test_period_report_from_directory(client):
    resp = client.get("/api/v1/summaries/expenses/2024/6?locale=en")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["categories"] == ["Food", "Transport"]
    assert data["rows"][1]["cells"] == [50.0, 30.0]
    assert data["rows"][1]["total"] == 80.0
    assert data["grand_total"]["formatted"] == "TRY 180.00"
    assert data["warnings"][0]["category"] == "Food"


def test_period_report_defaults_to_configured_locale(client):
    data = client.get("/api/v1/summaries/expenses/2024/6").get_json()
    assert data["locale"] == "tr"
    assert data["grand_total"]["formatted"] == "₺180,00"


def test_period_report_missing_file_is_404(client):
    resp = client.get("/api/v1/summaries/expenses/2024/7")
    assert resp.status_code == 404
    assert "2024-07" in resp.get_json()["error"]


def test_period_report_invalid_month_is_400(client):
    resp = client.get("/api/v1/summaries/expenses/2024/13")
    assert resp.status_code == 400
    assert "month" in resp.get_json()["error"]


def test_no_summaries_dir_configured_is_404():
    app = create_app()
    resp = app.test_client().get("/api/v1/summaries/expenses/2024/6")
    assert resp.status_code == 404


def test_post_report(client, summary_dto):
    resp = client.post("/api/v1/reports?locale=en&policy=recomputed&currency=USD", json=summary_dto)

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["column_totals"][0]["value"] == 150.0
    assert data["column_totals"][0]["formatted"] == "$150.00"
    assert data["column_totals"][0]["reconciled"] is False


def test_post_empty_sources_is_valid(client):
    resp = client.post("/api/v1/reports", json={"year": 2024, "month": 2, "sources": []})

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["is_empty"] is True
    assert data["rows"] == []
    assert data["grand_total"]["value"] == 0.0
    assert data["period"]["name"] == "Şubat 2024"


def test_post_rejects_bad_input(client):
    assert client.post("/api/v1/reports", data="nope", content_type="text/plain").status_code == 400
    assert client.post("/api/v1/reports", json={"year": 2024, "month": 0}).status_code == 400
    assert client.post("/api/v1/reports?locale=de", json={"year": 2024, "month": 1}).status_code == 400
    assert client.post("/api/v1/reports?policy=max", json={"year": 2024, "month": 1}).status_code == 400
