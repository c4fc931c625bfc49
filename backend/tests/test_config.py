"""
PostBoard Backend: Settings Tests
=================================

What:  Validation and derived properties of postboard.config.Settings.
"""

import pytest
from pydantic import ValidationError

from postboard.config import Settings


class TestSettingsValidation:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.auth_token == "mysecrettoken"
        assert settings.auth_header == "authorization"
        assert settings.backend_port == 3000
        assert settings.legacy_delete is False

    @pytest.mark.parametrize("value, expected", [("MEMORY", "memory"), ("database", "database")])
    def test_store_backend_normalized(self, value, expected):
        assert Settings(store_backend=value).store_backend == expected

    def test_unknown_store_backend_rejected(self):
        with pytest.raises(ValidationError, match="store_backend"):
            Settings(store_backend="mongo")

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_port_range(self):
        with pytest.raises(ValidationError):
            Settings(backend_port=80)

    def test_env_vars_are_read(self, monkeypatch):
        monkeypatch.setenv("AUTH_TOKEN", "from-env")
        monkeypatch.setenv("LEGACY_DELETE", "true")

        settings = Settings()

        assert settings.auth_token == "from-env"
        assert settings.legacy_delete is True


class TestDerivedSettings:
    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_uses_database(self):
        assert Settings(store_backend="database").uses_database is True
        assert Settings(store_backend="memory").uses_database is False


class TestProductionValidation:
    def test_demo_values_are_flagged(self):
        with pytest.raises(ValueError) as info:
            Settings(legacy_delete=True).validate_required_for_production()

        message = str(info.value)
        assert "AUTH_TOKEN" in message
        assert "LOGIN_PASSWORD" in message
        assert "LEGACY_DELETE" in message

    def test_hardened_settings_pass(self):
        Settings(auth_token="s3cret", login_password="correct horse").validate_required_for_production()
