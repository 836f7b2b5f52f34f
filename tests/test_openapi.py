from fastapi.testclient import TestClient

from app.main import app


def test_openapi_documents_error_envelope_and_rate_limit_headers():
    resp = TestClient(app).get("/openapi.json")

    assert resp.status_code == 200
    schema = resp.json()
    assert "ErrorEnvelope" in schema["components"]["schemas"]

    responses = schema["paths"]["/api/analyze"]["post"]["responses"]
    envelope_ref = {"$ref": "#/components/schemas/ErrorEnvelope"}
    for status_code in ("400", "429", "500"):
        assert responses[status_code]["content"]["application/json"]["schema"] == envelope_ref

    headers = responses["429"]["headers"]
    for name in ("Retry-After", "X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset"):
        assert name in headers

    tag_names = {tag["name"] for tag in schema["tags"]}
    assert {"Analysis", "Health"} <= tag_names
