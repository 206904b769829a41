# coverfinder/inputs/settings.py
"""
Settings loader for the cover resolver.

Goals
-----
- File-first settings with validation via Pydantic.
- Accept both a flat object and a wrapped {"settings": {...}} shape.
- Accept the camelCase credential keys (apiId / affiliateId) written by the
  options form as well as snake_case.
- Minimal environment-variable overrides for CI/CLI convenience.

Environment overrides (optional)
--------------------------------
- COVERFINDER_API_ID          -> ResolverSettings.api_id
- COVERFINDER_AFFILIATE_ID    -> ResolverSettings.affiliate_id
- COVERFINDER_TIMEOUT_S       -> ResolverSettings.request_timeout_s (float)
- COVERFINDER_CACHE_TTL_DAYS  -> ResolverSettings.cache_ttl_days (float)
- COVERFINDER_BYPASS_PREFIXES -> ResolverSettings.cache_bypass_prefixes (comma-separated, "" clears)

Public API
----------
- class SettingsLoader:
    - load(path: str | Path | None) -> ResolverSettings
    - load_json(text: str) -> ResolverSettings
- function load_settings(path) -> ResolverSettings  (convenience)
- function credentials_from_env(prefix) -> AffiliateCredentials
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import ValidationError

from coverfinder.schemas.models import AffiliateCredentials, ResolverSettings

DEFAULT_ENV_PREFIX = "COVERFINDER_"


@dataclass(frozen=True)
class SettingsLoader:
    """
    File-first settings loader with light env overrides.

    Default search (when path=None):
        1) ./coverfinder.json
        2) ./config.json
    Missing files fall back to defaults; credentials may still come from env.
    """

    env_prefix: str = DEFAULT_ENV_PREFIX

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> ResolverSettings:
        p = self._resolve_path(path)
        raw = self._read_json_file(p) if p else {}
        return self._apply_env_overrides(self._parse_root(raw))

    def load_json(self, text: str) -> ResolverSettings:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid settings JSON: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Settings JSON must be an object.")
        return self._apply_env_overrides(self._parse_root(raw))

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path | None:
        if path is not None:
            p = Path(path).expanduser()
            if not p.exists():
                raise FileNotFoundError(f"Settings file not found: {p}")
            return p
        for candidate in (Path("coverfinder.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        return None

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported settings format for {p.name}; only .json supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {p} must contain a JSON object.")
        return cast(dict[str, Any], data)

    def _parse_root(self, data: dict[str, Any]) -> ResolverSettings:
        body = data.get("settings", data)
        if not isinstance(body, dict):
            raise ValueError("'settings' must be a JSON object.")
        try:
            return ResolverSettings.model_validate(body)
        except ValidationError as e:
            raise ValueError(f"Settings validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: ResolverSettings) -> ResolverSettings:
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        for env_key, field in (("API_ID", "api_id"), ("AFFILIATE_ID", "affiliate_id")):
            val = os.getenv(f"{prefix}{env_key}")
            if val:
                updates[field] = val.strip()

        for env_key, field in (("TIMEOUT_S", "request_timeout_s"), ("CACHE_TTL_DAYS", "cache_ttl_days")):
            val = os.getenv(f"{prefix}{env_key}")
            if not val:
                continue
            try:
                num = float(val)
            except ValueError:
                # Ignore bad value; keep validated setting
                continue
            if num > 0:
                updates[field] = num

        bypass = os.getenv(f"{prefix}BYPASS_PREFIXES")
        if bypass is not None:
            updates["cache_bypass_prefixes"] = bypass

        if not updates:
            return cfg
        # Re-validate so string prefixes are split and bounds are checked
        merged = cfg.model_dump()
        merged.update(updates)
        return ResolverSettings.model_validate(merged)


# ----------------------------
# Convenience functions
# ----------------------------


def load_settings(path: str | Path | None = None) -> ResolverSettings:
    """Convenience wrapper for one-shot callers."""
    return SettingsLoader().load(path)


def credentials_from_env(prefix: str = DEFAULT_ENV_PREFIX) -> AffiliateCredentials:
    """Read affiliate credentials from the environment at call time."""
    return AffiliateCredentials(
        api_id=os.getenv(f"{prefix}API_ID", "").strip(),
        affiliate_id=os.getenv(f"{prefix}AFFILIATE_ID", "").strip(),
    )


__all__ = [
    "DEFAULT_ENV_PREFIX",
    "SettingsLoader",
    "load_settings",
    "credentials_from_env",
]
