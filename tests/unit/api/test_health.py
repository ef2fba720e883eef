def test_health_reports_loaded_data(client, upstream):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "providers_loaded": 3,
        "knowledge_blocks_loaded": 3,
        "model": "gpt-4o-mini",
        "api_key_configured": True,
    }
    assert upstream.requests == []
