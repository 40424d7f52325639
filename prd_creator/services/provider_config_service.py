"""Provider configuration — env defaults merged with a JSON override file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from prd_creator.config import Settings
from prd_creator.schemas.provider import ProviderConfig

logger = logging.getLogger(__name__)

# Override file keys -> ProviderConfig fields
_OVERRIDE_FIELDS = {"apiKey": "api_key", "baseUrl": "base_url", "model": "model"}


def _ensure_config_file(path: Path) -> None:
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{}", encoding="utf-8")


def get_stored_provider_config(path: Path) -> dict[str, dict[str, Any]]:
    """Read stored overrides; an unreadable file counts as no overrides."""
    _ensure_config_file(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Provider config file %s is not valid JSON; ignoring it", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Provider config file %s is not a JSON object; ignoring it", path)
        return {}

    configs: dict[str, dict[str, Any]] = {}
    for provider_id, entry in data.items():
        if not isinstance(entry, dict):
            logger.warning("Ignoring malformed config entry for provider %s in %s", provider_id, path)
            entry = {}
        configs[provider_id] = entry
    return configs


def update_stored_provider_config(path: Path, provider_id: str, partial: dict[str, Any]) -> dict[str, Any]:
    """Merge ``partial`` (None values skipped) into one provider's overrides. Last write wins."""
    all_configs = get_stored_provider_config(path)
    existing = all_configs.get(provider_id) or {}
    existing.update({k: v for k, v in partial.items() if v is not None})
    all_configs[provider_id] = existing
    path.write_text(json.dumps(all_configs, indent=2), encoding="utf-8")
    logger.info("Updated stored configuration for provider %s", provider_id)
    return existing


def env_defaults(settings: Settings) -> dict[str, ProviderConfig]:
    return {
        "openai": ProviderConfig(
            id="openai", api_key=settings.openai_api_key, base_url=settings.openai_base_url, model=settings.openai_model
        ),
        "anthropic": ProviderConfig(
            id="anthropic",
            api_key=settings.anthropic_api_key,
            base_url=settings.anthropic_base_url,
            model=settings.anthropic_model,
        ),
        "gemini": ProviderConfig(id="gemini", api_key=settings.gemini_api_key, model=settings.gemini_model),
        "local": ProviderConfig(id="local", base_url=settings.local_model_url, model=settings.local_model_name),
        "template": ProviderConfig(id="template"),
    }


def _merge(base: ProviderConfig, override: dict[str, Any]) -> ProviderConfig:
    updates: dict[str, Any] = {}
    extra = dict(base.extra)
    for key, value in override.items():
        if value is None:
            continue
        field = _OVERRIDE_FIELDS.get(key)
        if field:
            updates[field] = value
        else:
            extra[key] = value
    return base.model_copy(update={**updates, "extra": extra})


def get_provider_configs(settings: Settings) -> dict[str, ProviderConfig]:
    """Env-derived defaults with stored overrides on top (override wins)."""
    stored = get_stored_provider_config(settings.provider_config_path)
    configs = {pid: _merge(cfg, stored.get(pid) or {}) for pid, cfg in env_defaults(settings).items()}

    configured = [
        pid for pid, cfg in configs.items()
        if cfg.api_key or (pid == "local" and cfg.base_url) or pid == "template"
    ]
    logger.info("Configured providers: %s", ", ".join(configured))
    return configs
