"""Provider configuration merge tests: env defaults plus the JSON override file."""

import json

from prd_creator.config import Settings
from prd_creator.services import provider_config_service


def test_env_defaults(settings):
    settings = settings.model_copy(update={"openai_api_key": "sk-env", "local_model_url": "http://localhost:11434/v1"})
    configs = provider_config_service.get_provider_configs(settings)

    assert set(configs) == {"openai", "anthropic", "gemini", "local", "template"}
    assert configs["openai"].api_key == "sk-env"
    assert configs["openai"].model == "gpt-4"
    assert configs["anthropic"].api_key is None
    assert configs["local"].base_url == "http://localhost:11434/v1"
    assert configs["local"].model == "llama3"


def test_override_file_wins(settings):
    settings = settings.model_copy(update={"openai_api_key": "sk-env"})
    provider_config_service.update_stored_provider_config(
        settings.provider_config_path, "openai", {"apiKey": "sk-file", "model": "gpt-4o"}
    )

    openai = provider_config_service.get_provider_configs(settings)["openai"]
    assert openai.api_key == "sk-file"
    assert openai.model == "gpt-4o"


def test_unknown_override_keys_land_in_extra(settings):
    provider_config_service.update_stored_provider_config(
        settings.provider_config_path, "gemini", {"apiKey": "g", "safety": "strict"}
    )
    gemini = provider_config_service.get_provider_configs(settings)["gemini"]
    assert gemini.api_key == "g"
    assert gemini.extra == {"safety": "strict"}


def test_partial_update_skips_none(settings):
    path = settings.provider_config_path
    provider_config_service.update_stored_provider_config(path, "anthropic", {"apiKey": "a1", "model": "m1"})
    merged = provider_config_service.update_stored_provider_config(
        path, "anthropic", {"apiKey": None, "baseUrl": None, "model": "m2"}
    )

    assert merged == {"apiKey": "a1", "model": "m2"}
    assert json.loads(path.read_text())["anthropic"] == {"apiKey": "a1", "model": "m2"}


def test_missing_file_is_created_empty(settings):
    path = settings.provider_config_path
    assert not path.exists()
    assert provider_config_service.get_stored_provider_config(path) == {}
    assert path.read_text() == "{}"


def test_invalid_json_counts_as_no_overrides(settings):
    path = settings.provider_config_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{not json")

    assert provider_config_service.get_stored_provider_config(path) == {}
    assert provider_config_service.get_provider_configs(settings)["openai"].api_key is None


def test_provider_env_vars_are_unprefixed(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    monkeypatch.setenv("LOCAL_MODEL_API_URL", "http://gpu-box:8000/v1")
    monkeypatch.setenv("DEFAULT_AI_PROVIDER", "local")

    settings = Settings(_env_file=None, data_dir=tmp_path)
    assert settings.openai_api_key == "sk-from-env"
    assert settings.local_model_url == "http://gpu-box:8000/v1"
    assert settings.default_ai_provider == "local"


def test_non_object_provider_entry_is_ignored(settings):
    path = settings.provider_config_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"openai": "oops", "local": {"baseUrl": "http://x"}}))

    assert provider_config_service.get_stored_provider_config(path) == {"openai": {}, "local": {"baseUrl": "http://x"}}
    configs = provider_config_service.get_provider_configs(settings)
    assert configs["openai"].api_key is None
    assert configs["local"].base_url == "http://x"


def test_update_replaces_non_object_provider_entry(settings):
    path = settings.provider_config_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"openai": "oops"}))

    merged = provider_config_service.update_stored_provider_config(path, "openai", {"apiKey": "k"})
    assert merged == {"apiKey": "k"}
    assert json.loads(path.read_text()) == {"openai": {"apiKey": "k"}}


def test_non_object_file_counts_as_no_overrides(settings):
    path = settings.provider_config_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("[1, 2, 3]")

    assert provider_config_service.get_stored_provider_config(path) == {}
