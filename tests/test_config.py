import pytest

from shopfront.app import create_app
from shopfront.config import ShopConfig
from shopfront.services import JsonFileUserRepository


def test_load_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("SHOPFRONT_DATA_DIR", str(tmp_path / "store"))
    monkeypatch.setenv("SHOPFRONT_USER_STORE", "Memory")
    monkeypatch.setenv("SHOPFRONT_SEED_PRODUCTS", "false")
    monkeypatch.setenv("SHOPFRONT_PORT", "8123")

    config = ShopConfig.load()
    assert config.data_dir.is_dir()
    assert config.user_store == "memory"
    assert config.seed_products is False
    assert config.port == 8123
    assert config.products_data_file == tmp_path / "store" / "products.json"


def test_unknown_user_store_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("SHOPFRONT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SHOPFRONT_USER_STORE", "redis")
    with pytest.raises(ValueError):
        ShopConfig.load()


def test_file_user_store_is_wired(tmp_path):
    config = ShopConfig(secret_key="s", log_level="INFO", data_dir=tmp_path, seed_products=False)
    app = create_app(config)
    components = app.extensions["shopfront_components"]
    assert isinstance(components["user_repo"], JsonFileUserRepository)
    assert components["product_repo"].list_products() == []


def test_unknown_log_level_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("SHOPFRONT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SHOPFRONT_LOG_LEVEL", "verbose")
    with pytest.raises(ValueError, match="log level"):
        ShopConfig.load()


def test_create_app_rejects_bad_log_level(tmp_path):
    config = ShopConfig(secret_key="s", log_level="VERBOSE", data_dir=tmp_path)
    with pytest.raises(ValueError, match="log level"):
        create_app(config)


def test_startup_reports_loaded_accounts(tmp_path, caplog):
    JsonFileUserRepository(tmp_path / "users.json").create_user("Ada", "ada@example.com", "hunter22")
    config = ShopConfig(secret_key="s", log_level="INFO", data_dir=tmp_path, seed_products=False)
    caplog.set_level("INFO")
    create_app(config)
    assert "file user store with 1 account(s)" in caplog.text
