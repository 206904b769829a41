# tests/unit/test_settings_loader.py
from __future__ import annotations

import json

import pytest

from coverfinder.inputs import SettingsLoader, credentials_from_env, load_settings
from coverfinder.schemas.models import DEFAULT_CATALOG_BASES


def _write(tmp_path, payload, name="coverfinder.json"):
    p = tmp_path / name
    p.write_text(json.dumps(payload), encoding="utf-8")
    return p


def test_defaults_when_no_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = SettingsLoader().load()
    assert cfg.request_timeout_s == 10.0
    assert cfg.cache_ttl_days == 14.0
    assert cfg.cache_bypass_prefixes == ("START-",)
    assert cfg.catalog_bases == DEFAULT_CATALOG_BASES
    assert cfg.max_detail_candidates == 8
    assert cfg.affiliate_hits == 20
    assert not cfg.has_affiliate_credentials


def test_default_search_prefers_coverfinder_json(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, {"api_id": "from-config"}, name="config.json")
    assert SettingsLoader().load().api_id == "from-config"
    _write(tmp_path, {"api_id": "from-coverfinder"})
    assert SettingsLoader().load().api_id == "from-coverfinder"


def test_flat_file_with_camel_case_credentials(tmp_path):
    p = _write(tmp_path, {"apiId": "abc", "affiliateId": "aff-990", "request_timeout_s": 5})
    cfg = load_settings(p)
    assert cfg.api_id == "abc"
    assert cfg.affiliate_id == "aff-990"
    assert cfg.request_timeout_s == 5.0
    assert cfg.has_affiliate_credentials
    assert cfg.credentials.complete


def test_wrapped_settings_shape(tmp_path):
    p = _write(tmp_path, {"settings": {"api_id": "abc", "cache_bypass_prefixes": "start-, vr-"}})
    cfg = SettingsLoader().load(p)
    assert cfg.api_id == "abc"
    assert cfg.cache_bypass_prefixes == ("START-", "VR-")


def test_missing_explicit_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SettingsLoader().load(tmp_path / "nope.json")


def test_non_json_extension_rejected(tmp_path):
    p = tmp_path / "settings.yaml"
    p.write_text("api_id: x", encoding="utf-8")
    with pytest.raises(ValueError, match="only .json"):
        SettingsLoader().load(p)


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        "[1, 2]",
        json.dumps({"settings": "oops"}),
        json.dumps({"request_timeout_s": -1}),
        json.dumps({"catalog_bases": []}),
    ],
)
def test_invalid_settings_raise_value_error(text):
    with pytest.raises(ValueError):
        SettingsLoader().load_json(text)


def test_env_overrides_apply(monkeypatch):
    monkeypatch.setenv("COVERFINDER_API_ID", " env-api ")
    monkeypatch.setenv("COVERFINDER_AFFILIATE_ID", "env-aff")
    monkeypatch.setenv("COVERFINDER_TIMEOUT_S", "3.5")
    monkeypatch.setenv("COVERFINDER_CACHE_TTL_DAYS", "7")
    monkeypatch.setenv("COVERFINDER_BYPASS_PREFIXES", "")
    cfg = SettingsLoader().load_json(json.dumps({"api_id": "file-api"}))
    assert cfg.api_id == "env-api"
    assert cfg.affiliate_id == "env-aff"
    assert cfg.request_timeout_s == 3.5
    assert cfg.cache_ttl_days == 7.0
    assert cfg.cache_bypass_prefixes == ()


@pytest.mark.parametrize("value", ["abc", "0", "-2"])
def test_bad_numeric_env_values_are_ignored(monkeypatch, value):
    monkeypatch.setenv("COVERFINDER_TIMEOUT_S", value)
    cfg = SettingsLoader().load_json(json.dumps({"request_timeout_s": 4}))
    assert cfg.request_timeout_s == 4.0


def test_custom_env_prefix(monkeypatch):
    monkeypatch.setenv("MYAPP_API_ID", "custom")
    assert SettingsLoader(env_prefix="MYAPP_").load_json("{}").api_id == "custom"


def test_credentials_from_env(monkeypatch):
    assert not credentials_from_env().complete
    monkeypatch.setenv("COVERFINDER_API_ID", "a")
    monkeypatch.setenv("COVERFINDER_AFFILIATE_ID", "b")
    creds = credentials_from_env()
    assert (creds.api_id, creds.affiliate_id) == ("a", "b")
    assert creds.complete
