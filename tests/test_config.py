# tests/test_config.py
import importlib

from marketplace.config import Settings

def test_defaults(monkeypatch):
    for var in ("PORT", "PUBLIC_DIR"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.PORT == 5000
    assert s.PUBLIC_DIR == "public"

def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8085")
    monkeypatch.setenv("CORS_ORIGIN", "http://shop.example")
    s = Settings(_env_file=None)
    assert s.PORT == 8085
    assert s.CORS_ORIGIN == "http://shop.example"

def test_cors_allows_only_configured_origin(client):
    ok = client.get("/api/products", headers={"Origin": "http://frontend.test"})
    assert ok.headers.get("access-control-allow-origin") == "http://frontend.test"
    other = client.get("/api/products", headers={"Origin": "http://evil.test"})
    assert "access-control-allow-origin" not in other.headers

def test_settings_read_dotenv():
    assert Settings.model_config["env_file"] == ".env"

def _preflight(client, method):
    return client.options("/api/products", headers={
        "Origin": "http://frontend.test",
        "Access-Control-Request-Method": method,
    })

def test_cors_allows_only_get_and_post(client):
    assert _preflight(client, "POST").status_code == 200
    assert _preflight(client, "GET").status_code == 200
    assert _preflight(client, "PUT").status_code == 400
    assert _preflight(client, "DELETE").status_code == 400

def test_importing_main_builds_no_app(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    main = importlib.reload(importlib.import_module("marketplace.main"))
    assert not hasattr(main, "app")
    assert list(tmp_path.iterdir()) == []
