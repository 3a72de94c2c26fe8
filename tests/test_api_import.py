import io

from db.models import Deal

HEADER = "uniqueKey,fromCode,toCode,timestamp,amount"


def _deal(key, **overrides):
    body = {
        "uniqueKey": key,
        "fromCode": "USD",
        "toCode": "EUR",
        "timestamp": "2025-01-01T10:15:30Z",
        "amount": 100.00,
    }
    body.update(overrides)
    return body


def test_json_import(client, session):
    """Test that a valid JSON batch is imported and summarised."""
    response = client.post("/api/deals/import", json=[_deal("D-1"), _deal("D-2")])

    assert response.status_code == 200
    assert response.get_json() == {
        "totalRows": 2, "imported": 2, "invalid": 0, "duplicates": 0, "errors": [],
    }
    assert session.query(Deal).count() == 2


def test_json_import_reports_rows(client):
    """Test that bad rows come back in the summary, not as an HTTP error."""
    response = client.post("/api/deals/import", json=[
        _deal("D-1"),
        _deal("D-1"),
        _deal("D-2", toCode="USD"),
        None,
    ])

    assert response.status_code == 200
    data = response.get_json()
    assert (data["totalRows"], data["imported"], data["invalid"], data["duplicates"]) == (4, 1, 2, 1)
    assert data["errors"] == [
        {"rowIndex": 2, "uniqueKey": "D-1", "message": "Duplicate uniqueKey (already imported)"},
        {"rowIndex": 3, "uniqueKey": "D-2", "message": "fromCode and toCode must be different"},
        {"rowIndex": 4, "uniqueKey": None, "message": "Deal payload is null"},
    ]


def test_json_null_body_is_empty_batch(client):
    response = client.post("/api/deals/import", data="null",
                           content_type="application/json")

    assert response.status_code == 200
    assert response.get_json()["totalRows"] == 0


def test_malformed_json_is_bad_request(client):
    response = client.post("/api/deals/import", data="[{",
                           content_type="application/json")

    assert response.status_code == 400
    data = response.get_json()
    assert data["status"] == 400
    assert data["error"] == "Bad Request"
    assert data["path"] == "/api/deals/import"
    assert data["message"].startswith("Malformed JSON request")


def test_unconvertible_value_is_bad_request(client, session):
    response = client.post("/api/deals/import",
                           json=[_deal("D-1"), _deal("D-2", timestamp="soon")])

    assert response.status_code == 400
    assert session.query(Deal).count() == 0


def test_csv_upload(client, session):
    """Test multipart CSV import with one short row and one bad amount."""
    csv_text = "\n".join([
        HEADER,
        "D-1,usd,eur,2025-01-01T10:15:30Z,100.00",
        "D-2,USD,EUR,2025-01-01T10:15:30Z",
        "",
        "D-3,GBP,JPY,2025-01-01T10:15:30+01:00,abc",
        "D-4,GBP,JPY,2025-01-01T10:15:30+01:00,7.5",
        "D-1,GBP,JPY,2025-01-01T10:15:30+01:00,7.5",
    ]) + "\n"

    response = client.post(
        "/api/deals/import/csv",
        data={"file": (io.BytesIO(csv_text.encode()), "deals.csv")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    data = response.get_json()
    assert (data["totalRows"], data["imported"], data["invalid"], data["duplicates"]) == (5, 2, 2, 1)
    assert [e["rowIndex"] for e in data["errors"]] == [2, 3, 3]
    assert "wrong column count" in data["errors"][0]["message"]
    assert data["errors"][0]["uniqueKey"] is None
    assert data["errors"][1]["uniqueKey"] == "D-3"
    assert data["errors"][2]["message"] == "Duplicate uniqueKey (already imported)"

    stored = session.query(Deal).filter(Deal.unique_key == "D-1").one()
    assert (stored.from_code, stored.to_code) == ("USD", "EUR")


def test_csv_raw_body(client):
    body = f"{HEADER}\nD-1,USD,EUR,2025-01-01T10:15:30Z,1\n"
    response = client.post("/api/deals/import/csv", data=body, content_type="text/csv")

    assert response.status_code == 200
    assert response.get_json()["imported"] == 1


def test_csv_bad_header_is_bad_request(client, session):
    body = "id,from,to,when,amount\nD-1,USD,EUR,2025-01-01T10:15:30Z,1\n"
    response = client.post("/api/deals/import/csv", data=body, content_type="text/csv")

    assert response.status_code == 400
    data = response.get_json()
    assert "Invalid CSV header" in data["message"]
    assert "totalRows" not in data
    assert session.query(Deal).count() == 0


def test_csv_upload_without_file_field(client):
    response = client.post("/api/deals/import/csv", data={"note": "no file"},
                           content_type="multipart/form-data")
    assert response.status_code == 400


def test_unknown_route_is_json(client):
    response = client.get("/api/deals/nope")
    assert response.status_code == 404
    assert response.get_json()["status"] == 404
