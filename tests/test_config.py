"""Test configuration management."""


from box_inventory.config import Settings, get_settings


def test_settings_defaults(monkeypatch):
    """Test default configuration values."""
    monkeypatch.delenv("FLASK_ENV", raising=False)

    settings = Settings(_env_file=None)

    assert settings.FLASK_ENV == "development"
    assert settings.DEBUG is True
    assert settings.SECRET_KEY == "dev-secret-key-change-in-production"
    assert settings.INVENTORY_API_URL == "http://localhost:5000/api"
    assert settings.INVENTORY_LOCATION_PATHS == {"Warehouse": "warehouse", "Store": "store", "Store2": "store2"}
    assert settings.SNAPSHOT_MAX_AGE_SECONDS == 30
    assert settings.SMART_CREATE_SKIP_EMPTY_BOXES is False
    assert settings.LEDGER_ENFORCE_CAPACITY is False
    assert settings.DEFAULT_BOX_CAPACITY == 50
    assert settings.DEFAULT_BOX_NUMBER_PREFIX == "BOX"


def test_settings_from_env(monkeypatch):
    """Test configuration from environment variables."""
    monkeypatch.setenv("FLASK_ENV", "production")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("INVENTORY_API_URL", "https://dashboard.example.com/api")
    monkeypatch.setenv("LEDGER_ENFORCE_CAPACITY", "true")
    monkeypatch.setenv("INVENTORY_LOCATION_PATHS", '{"Store": "store", "Outlet": "outlet"}')

    settings = Settings(_env_file=None)

    assert settings.FLASK_ENV == "production"
    assert settings.is_production is True
    assert settings.DEBUG is False
    assert settings.INVENTORY_API_URL == "https://dashboard.example.com/api"
    assert settings.LEDGER_ENFORCE_CAPACITY is True
    assert settings.INVENTORY_LOCATION_PATHS == {"Store": "store", "Outlet": "outlet"}


def test_testing_environment_disables_snapshot_cache():
    """Snapshots are always re-read in the testing environment."""
    settings = Settings(_env_file=None, FLASK_ENV="testing", SNAPSHOT_MAX_AGE_SECONDS=60)

    assert settings.is_testing is True
    assert settings.SNAPSHOT_MAX_AGE_SECONDS == 0


def test_get_settings_cached():
    """Test that get_settings returns cached instance."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2


def test_settings_testing_env_override(tmp_path, monkeypatch):
    """Settings should load testing override env file when FLASK_ENV=testing."""
    base_env = tmp_path / ".env"
    override_env = tmp_path / ".env.test"

    base_env.write_text("INVENTORY_API_URL=http://base/api\n")
    override_env.write_text("INVENTORY_API_URL=http://override/api\n")

    monkeypatch.setenv("FLASK_ENV", "testing")

    import box_inventory.config as config

    config.get_settings.cache_clear()
    monkeypatch.setattr(config, "BASE_DIR", tmp_path)
    monkeypatch.setattr(config, "DEFAULT_ENV_FILES", (base_env,))
    monkeypatch.setattr(config, "ENV_FILE_OVERRIDES", {"testing": (override_env,)})

    try:
        settings = config.get_settings()
        assert settings.INVENTORY_API_URL == "http://override/api"
    finally:
        # Ensure later tests see fresh settings values rather than the override copy.
        config.get_settings.cache_clear()


def test_settings_extra_env_ignored(monkeypatch):
    """Extra environment variables should be ignored."""
    monkeypatch.setenv("SOME_UNRELATED_SETTING", "42")

    settings = Settings()

    assert not hasattr(settings, "SOME_UNRELATED_SETTING")
