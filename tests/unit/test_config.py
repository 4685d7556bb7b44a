"""
Tests for the settings loader
"""
from pathlib import Path

import pytest

from brightwire.config import ConfigurationError, Settings, SettingsLoader, load_settings


class TestSettingsLoader:
    """SettingsLoader のテスト"""

    def test_defaults(self, tmp_path):
        settings = load_settings(config_file=tmp_path / "missing.yaml", environ={})

        assert settings.port == 5000
        assert settings.host == "0.0.0.0"
        assert settings.cors_origin == "http://localhost:3000"
        assert settings.store_backend == "supabase"
        assert settings.supabase_url is None

    def test_environment_values(self, tmp_path):
        settings = load_settings(
            config_file=tmp_path / "missing.yaml",
            environ={
                "PORT": "8080",
                "CORS_ORIGIN": "https://sparkyelectric.test",
                "ADMIN_EMAIL": "boss@sparkyelectric.test",
                "ADMIN_PASSWORD": "s3cret",
                "STORE_BACKEND": "file",
                "BRIGHTWIRE_DATA_DIR": str(tmp_path / "rows"),
            },
        )

        assert settings.port == 8080
        assert settings.cors_origin == "https://sparkyelectric.test"
        assert settings.admin_email == "boss@sparkyelectric.test"
        assert settings.admin_password == "s3cret"
        assert settings.store_backend == "file"
        assert settings.data_dir == tmp_path / "rows"

    def test_vite_supabase_fallback(self, tmp_path):
        settings = load_settings(
            config_file=tmp_path / "missing.yaml",
            environ={
                "VITE_SUPABASE_URL": "https://vite.supabase.co",
                "VITE_SUPABASE_ANON_KEY": "vite-key",
            },
        )
        assert settings.supabase_url == "https://vite.supabase.co"
        assert settings.supabase_key == "vite-key"

    def test_server_names_win_over_vite_names(self, tmp_path):
        settings = load_settings(
            config_file=tmp_path / "missing.yaml",
            environ={
                "SUPABASE_URL": "https://server.supabase.co",
                "VITE_SUPABASE_URL": "https://vite.supabase.co",
            },
        )
        assert settings.supabase_url == "https://server.supabase.co"

    def test_empty_variable_is_ignored(self, tmp_path):
        settings = load_settings(config_file=tmp_path / "missing.yaml", environ={"PORT": ""})
        assert settings.port == 5000

    def test_yaml_file(self, tmp_path):
        config_file = tmp_path / "brightwire.yaml"
        config_file.write_text("port: 7000\nstore_backend: memory\nlog_level: DEBUG\n")

        settings = load_settings(config_file=config_file, environ={})

        assert settings.port == 7000
        assert settings.store_backend == "memory"
        assert settings.log_level == "DEBUG"

    def test_environment_overrides_yaml(self, tmp_path):
        config_file = tmp_path / "brightwire.yaml"
        config_file.write_text("port: 7000\n")

        settings = load_settings(config_file=config_file, environ={"PORT": "7001"})

        assert settings.port == 7001

    def test_config_file_from_environment(self, tmp_path):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("cors_origin: https://custom.test\n")

        loader = SettingsLoader(environ={"BRIGHTWIRE_CONFIG": str(config_file)})

        assert loader.config_file == config_file
        assert loader.load().cors_origin == "https://custom.test"

    def test_empty_yaml_file(self, tmp_path):
        config_file = tmp_path / "brightwire.yaml"
        config_file.write_text("")
        assert load_settings(config_file=config_file, environ={}).port == 5000

    def test_yaml_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "brightwire.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings(config_file=config_file, environ={})

    def test_invalid_port(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Invalid settings"):
            load_settings(config_file=tmp_path / "missing.yaml", environ={"PORT": "http"})

    def test_reads_process_environment(self, isolated_env, monkeypatch):
        monkeypatch.setenv("PORT", "6123")
        monkeypatch.setenv("STORE_BACKEND", "memory")

        settings = load_settings()

        assert settings.port == 6123
        assert settings.store_backend == "memory"


class TestRequireStore:
    """Settings.require_store のテスト"""

    def test_memory_and_file_need_nothing(self):
        Settings(store_backend="memory").require_store()
        Settings(store_backend="file").require_store()

    def test_supabase_needs_url_and_key(self):
        with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
            Settings(store_backend="supabase", supabase_url="https://demo.supabase.co").require_store()

    def test_supabase_configured(self):
        Settings(
            store_backend="supabase",
            supabase_url="https://demo.supabase.co",
            supabase_key="anon",
        ).require_store()

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError, match="Unknown store backend 'redis'"):
            Settings(store_backend="redis").require_store()

    def test_data_dir_is_path(self):
        assert isinstance(Settings(data_dir="rows").data_dir, Path)
