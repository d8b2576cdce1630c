import json
import os

import pytest

import mcp_vision.cli as cli
from mcp_vision import Settings


@pytest.fixture
def captured(monkeypatch):
    calls = {}

    def fake_handle(req, cfg):
        calls["req"] = req
        calls["cfg"] = cfg
        return calls.get("resp", {"ok": True, "text": "answer"})

    monkeypatch.setattr(cli, "load_config", lambda: Settings(api_key="k"))
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    monkeypatch.setattr(cli, "handle_json_request", fake_handle)
    return calls


def test_cli_prints_answer(captured, capsys, tmp_path):
    img = tmp_path / "a.png"
    img.write_bytes(b"x")
    cli.main([str(img), "https://example.com/b.png", "-i", "describe", "--max-long-edge", "0", "-P", "vertex"])
    assert capsys.readouterr().out.strip() == "answer"
    assert captured["req"]["images"] == [str(img), "https://example.com/b.png"]
    assert captured["req"]["instruction"] == "describe"
    assert captured["cfg"].max_long_edge == 0
    assert captured["cfg"].provider == "vertex"
    assert captured["cfg"].api_key == "k"


def test_cli_error_exits(captured):
    captured["resp"] = {"ok": False, "errors": ["Not a valid image file"]}
    with pytest.raises(SystemExit) as ei:
        cli.main(["/nope.png", "-i", "x"])
    assert "ERROR: Not a valid image file" in str(ei.value.code)


def test_cli_json_output(captured, capsys):
    cli.main(["/nope.png", "-i", "x", "--json"])
    assert json.loads(capsys.readouterr().out) == {"ok": True, "text": "answer"}


def test_expand_image_args(tmp_path, monkeypatch):
    (tmp_path / "1.png").write_bytes(b"x")
    (tmp_path / "2.png").write_bytes(b"x")
    monkeypatch.chdir(tmp_path)
    out = cli.expand_image_args(["*.png", "1.png", "data:image/png;base64,AAAA"])
    assert out == [os.path.abspath("1.png"), os.path.abspath("2.png"), "data:image/png;base64,AAAA"]
