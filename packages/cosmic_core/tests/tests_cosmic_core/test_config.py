import pytest
from cosmic_core import CosmicSettings


class TestCosmicSettings:
    def test_default_development_state(self):
        """By default settings are in development mode with the site page size."""
        settings = CosmicSettings()
        assert settings.DEBUG is True
        assert settings.ENVIRONMENT == "development"
        assert settings.is_development() is True
        assert settings.DEFAULT_PAGE_SIZE == 10
        assert settings.MAX_PAGE_SIZE == 100

    def test_is_development_logic(self):
        """Debug always means development; otherwise ENVIRONMENT decides."""
        assert CosmicSettings(DEBUG=True).is_development() is True
        local = CosmicSettings(DEBUG=False, ENVIRONMENT="development")
        assert local.is_development() is True
        production = CosmicSettings(DEBUG=False, ENVIRONMENT="production")
        assert production.is_development() is False

    def test_production_settings_build_without_extra_keys(self, monkeypatch):
        """Turning debug off needs no further configuration."""
        monkeypatch.setenv("DEBUG", "false")
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = CosmicSettings()
        assert settings.DEBUG is False
        assert settings.is_development() is False

    def test_page_size_bounds(self):
        """The default page size cannot exceed the maximum."""
        with pytest.raises(ValueError, match="cannot exceed"):
            CosmicSettings(DEFAULT_PAGE_SIZE=50, MAX_PAGE_SIZE=20)

        with pytest.raises(ValueError, match="must be positive"):
            CosmicSettings(DEFAULT_PAGE_SIZE=0)

    def test_environment_override(self, monkeypatch):
        """Values are read from the environment."""
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/cosmic")
        monkeypatch.setenv("CORS_ORIGINS", '["https://cosmic.example"]')
        settings = CosmicSettings()
        assert settings.DATABASE_URL == "postgresql://u:p@db/cosmic"
        assert settings.CORS_ORIGINS == ["https://cosmic.example"]
