"""
Tests for the refresh trigger's bearer-secret check.
"""
from app.runtime.context import CacheEnvironment, environment_scope
from app.security.cron_auth import resolve_cron_secret, validate_cron_auth


class TestResolveCronSecret:
    def test_process_environment(self, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "CRON_SECRET", "from-env")
        assert resolve_cron_secret() == "from-env"

    def test_injected_secret_takes_precedence(self, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "CRON_SECRET", "from-env")
        with environment_scope(CacheEnvironment(cron_secret="injected")):
            assert resolve_cron_secret() == "injected"

    def test_explicit_environment(self):
        assert resolve_cron_secret(CacheEnvironment(cron_secret="explicit")) == "explicit"

    def test_not_configured(self):
        assert resolve_cron_secret() is None


class TestValidateCronAuth:
    def test_missing_secret_is_500(self):
        result = validate_cron_auth("Bearer anything")

        assert result.is_valid is False
        assert result.status == 500
        assert result.error == "CRON_SECRET not configured"

    def test_wrong_token_is_401(self, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "CRON_SECRET", "test-secret")

        result = validate_cron_auth("Bearer wrong")

        assert result.is_valid is False
        assert result.status == 401
        assert result.error == "Unauthorized"

    def test_missing_header_is_401(self, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "CRON_SECRET", "test-secret")

        assert validate_cron_auth(None).status == 401

    def test_scheme_is_required(self, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "CRON_SECRET", "test-secret")

        assert validate_cron_auth("test-secret").status == 401

    def test_valid_token(self, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "CRON_SECRET", "test-secret")

        result = validate_cron_auth("Bearer test-secret")

        assert result.is_valid is True
        assert result.status == 200
