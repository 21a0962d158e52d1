"""
Settings loading tests.

Run with:
    pytest tests/test_config.py -v
"""

import dataclasses

import pytest

from checkout_service.config import Settings, load_settings


class TestLoadSettings:

    def test_defaults(self, monkeypatch):
        for name in ("MONGODB_URI", "MONGODB_DB", "ENVIRONMENT", "CORS_ORIGINS", "LOG_FILE"):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.mongodb_uri == "mongodb://localhost:27017"
        assert settings.mongodb_db == "loopxpress"
        assert settings.cors_origins == []
        assert settings.log_file is None
        assert not settings.is_production

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RAZORPAY_API_KEY", "rzp_live_abc")
        monkeypatch.setenv("RAZORPAY_API_SECRET", "s3cret")
        monkeypatch.setenv("ENVIRONMENT", "Production")
        monkeypatch.setenv("CORS_ORIGINS", "https://loopxpress.vercel.app, https://loop-xpress-backend.vercel.app,")

        settings = load_settings()

        assert settings.razorpay_key_id == "rzp_live_abc"
        assert settings.razorpay_key_secret == "s3cret"
        assert settings.is_production
        assert settings.cors_origins == [
            "https://loopxpress.vercel.app",
            "https://loop-xpress-backend.vercel.app",
        ]

    def test_settings_are_immutable(self):
        settings = Settings()
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.environment = "production"
