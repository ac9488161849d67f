"""
Tests for the health check endpoint.
"""


def test_health_reports_service_and_version(client):
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["service"] == "bookkeeping-ledger"
    assert data["version"] == "0.1.0"
    assert data["status"] == "healthy"


def test_health_counts_rows_in_the_book(client):
    """
    The check reads the real tables, so it sees rows written
    by earlier requests in the same test transaction.
    """
    before = client.get("/health").json()
    assert before["database"] == "healthy"
    assert before["journal_entries"] == 0

    client.post("/journal/entries", json={
        "date": "2025-01-05T09:00:00",
        "description": "Owner investment",
        "lines": [
            {"account_name": "Cash", "debit": "1000"},
            {"account_name": "Capital", "credit": "1000"},
        ],
    })

    after = client.get("/health").json()
    assert after["journal_entries"] == 1
    assert after["accounts"] >= 29
