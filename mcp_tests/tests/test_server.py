import pytest

from server import server as server_mod


@pytest.mark.asyncio
async def test_build_server_registers_get_file_data(tmp_path):
    mcp = server_mod.build_server(paths_file=str(tmp_path / "paths.txt"), host="127.0.0.1", port=12345)

    assert mcp.name == "file-data-producer"
    assert mcp.settings.port == 12345

    tools = await mcp.list_tools()
    assert [t.name for t in tools] == ["get_file_data"]


def test_register_tools_wires_handler(dummy_mcp, tmp_path):
    handler = server_mod.register_tools(dummy_mcp, paths_file=str(tmp_path / "paths.txt"), workers=3)

    assert "get_file_data" in dummy_mcp.tools
    assert handler is not None


def _capture(monkeypatch):
    captures = {}

    def fake_build_server(**kwargs):
        captures["build_kwargs"] = kwargs
        return "MCP_INSTANCE"

    def fake_serve(mcp, **kwargs):
        captures["serve_mcp"] = mcp
        captures["serve_kwargs"] = kwargs

    monkeypatch.setattr(server_mod, "build_server", fake_build_server)
    monkeypatch.setattr(server_mod, "serve", fake_serve)
    return captures


def test_main_passes_flags_through(monkeypatch, tmp_path):
    captures = _capture(monkeypatch)

    rc = server_mod.main(
        ["--paths-file", str(tmp_path / "p.txt"), "--port", "10001", "--transport", "sse"]
    )

    assert rc == 0
    assert captures["build_kwargs"]["paths_file"] == str(tmp_path / "p.txt")
    assert captures["build_kwargs"]["port"] == 10001
    assert captures["serve_mcp"] == "MCP_INSTANCE"
    assert captures["serve_kwargs"]["transport"] == "sse"
    assert captures["serve_kwargs"]["tls"] is False


def test_main_tls_requires_http_transport(monkeypatch):
    _capture(monkeypatch)

    with pytest.raises(SystemExit) as exc:
        server_mod.main(["--transport", "stdio", "--tls"])
    assert exc.value.code == 2


def test_main_tls_missing_credentials_fails(monkeypatch, tmp_path):
    captures = _capture(monkeypatch)

    rc = server_mod.main(
        [
            "--tls",
            "--cert-file", str(tmp_path / "server.pem"),
            "--key-file", str(tmp_path / "server.key"),
        ]
    )

    assert rc == 1
    assert "serve_mcp" not in captures


def test_main_tls_with_credentials(monkeypatch, tmp_path):
    captures = _capture(monkeypatch)
    cert = tmp_path / "server.pem"
    key = tmp_path / "server.key"
    cert.write_text("cert", encoding="utf-8")
    key.write_text("key", encoding="utf-8")

    rc = server_mod.main(
        ["--tls", "--transport", "streamable-http", "--cert-file", str(cert), "--key-file", str(key)]
    )

    assert rc == 0
    assert captures["serve_kwargs"]["tls"] is True
    assert captures["serve_kwargs"]["cert_file"] == str(cert)


def test_serve_with_tls_uses_uvicorn(monkeypatch, tmp_path):
    calls = {}

    def fake_uvicorn_run(app, **kwargs):
        calls["app"] = app
        calls["kwargs"] = kwargs

    monkeypatch.setattr(server_mod.uvicorn, "run", fake_uvicorn_run)

    mcp = server_mod.build_server(paths_file=str(tmp_path / "paths.txt"), host="0.0.0.0", port=10443)
    server_mod.serve(mcp, transport="streamable-http", tls=True, cert_file="c.pem", key_file="k.key")

    assert calls["kwargs"]["host"] == "0.0.0.0"
    assert calls["kwargs"]["port"] == 10443
    assert calls["kwargs"]["ssl_certfile"] == "c.pem"
    assert calls["kwargs"]["ssl_keyfile"] == "k.key"


def test_serve_without_tls_runs_transport():
    runs = []

    class FakeMCP:
        def run(self, *, transport: str):
            runs.append(transport)

    server_mod.serve(FakeMCP(), transport="stdio")
    assert runs == ["stdio"]
