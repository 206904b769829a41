# tests/integration/test_cli.py
from __future__ import annotations

import json

import pytest

import main as cli
from coverfinder import CoverResolver
from coverfinder.core.cache import CoverCache, JsonFileCacheStore
from tests.utils import DEFAULT_COVER_URL, StaticProvider

pytestmark = pytest.mark.integration


@pytest.fixture
def static_chain(monkeypatch, tmp_path):
    """Swap the network-backed chain for a single static provider and record how it was built."""
    monkeypatch.chdir(tmp_path)
    built: dict = {}

    def fake_build(settings, *, store=None, **kwargs):
        built["settings"] = settings
        built["store"] = store
        provider = StaticProvider(name="cdn-guess", source="cdn-guess", cover_url=DEFAULT_COVER_URL)
        built["provider"] = provider
        return CoverResolver([provider], CoverCache(store))

    monkeypatch.setattr(cli, "build_default_resolver", fake_build)
    return built


def test_cli_prints_success_envelope(static_chain, capsys):
    rc = cli.main(["abc_123", "--no-cache"])
    out = json.loads(capsys.readouterr().out)

    assert rc == 0
    assert out["ok"] is True
    assert out["data"]["code"] == "ABC-123"
    assert out["data"]["cover_url"] == DEFAULT_COVER_URL
    assert "error" not in out


def test_cli_parse_failure_exit_code(static_chain, capsys):
    rc = cli.main(["no code here", "--no-cache"])
    out = json.loads(capsys.readouterr().out)
    assert rc == 1
    assert out == {"ok": False, "error": "Unable to parse code from 'no code here'."}
    assert static_chain["provider"].calls == []


def test_cli_uses_json_file_cache(static_chain, tmp_path, capsys):
    cache_path = tmp_path / "data" / "covers.json"
    assert cli.main(["ABC-123", "--cache", str(cache_path)]) == 0
    capsys.readouterr()

    assert isinstance(static_chain["store"], JsonFileCacheStore)
    assert "cover:ABC-123" in json.loads(cache_path.read_text(encoding="utf-8"))


def test_cli_settings_file_and_title(static_chain, tmp_path, capsys):
    settings = tmp_path / "custom.json"
    settings.write_text(json.dumps({"settings": {"apiId": "abc", "request_timeout_s": 3}}), encoding="utf-8")

    assert cli.main(["ABC-123", "--settings", str(settings), "--title", "Alt XYZ-045", "--no-cache"]) == 0
    capsys.readouterr()
    assert static_chain["settings"].api_id == "abc"
    assert static_chain["settings"].request_timeout_s == 3.0
    assert static_chain["provider"].calls[0].queries == ("ABC-123", "ABC123", "XYZ-045")


def test_cli_missing_settings_file_exit_code(static_chain, tmp_path, capsys):
    rc = cli.main(["ABC-123", "--settings", str(tmp_path / "missing.json")])
    assert rc == 2
    assert "settings error" in capsys.readouterr().out
    assert "store" not in static_chain
