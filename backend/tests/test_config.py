"""Flipbook Backend — Settings Tests."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from flipbook.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "CORS_ORIGINS", "PUBLIC_PROJECTS_LIMIT", "SHARE_ID_MAX_ATTEMPTS"):
            monkeypatch.delenv(name, raising=False)

        s = Settings(_env_file=None)

        assert s.port == 3000
        assert s.cors_origins_list == ["*"]
        assert s.public_projects_limit == 50
        assert s.share_id_max_attempts == 5

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

        s = Settings(_env_file=None)

        assert s.port == 8080
        assert s.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_production_check_lists_problems(self):
        s = Settings(_env_file=None, mongodb_uri="", mongodb_database="")

        with pytest.raises(ValueError) as exc_info:
            s.validate_required_for_production()

        assert "MONGODB_URI" in str(exc_info.value)
        assert "MONGODB_DATABASE" in str(exc_info.value)
