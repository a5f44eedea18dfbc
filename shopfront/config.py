"""Shopfront 應用設定模組。"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


USER_STORE_BACKENDS = {"file", "memory"}
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ShopConfig:
    """封裝商品目錄應用的設定值。"""

    secret_key: str
    log_level: str
    data_dir: Path
    user_store: str = "file"
    seed_products: bool = True
    host: str = "127.0.0.1"
    port: int = 5000

    @property
    def products_data_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def users_data_file(self) -> Path:
        return self.data_dir / "users.json"

    @classmethod
    def load(cls) -> "ShopConfig":
        """從環境變數建構設定，並確保資料目錄存在。"""

        package_root = Path(__file__).resolve().parent
        default_data_dir = package_root.parent / "data"

        secret_key = os.environ.get("SHOPFRONT_SECRET_KEY", "shopfront-dev-secret")
        log_level = os.environ.get("SHOPFRONT_LOG_LEVEL", "INFO").upper()
        data_dir = Path(os.environ.get("SHOPFRONT_DATA_DIR", str(default_data_dir)))
        user_store = os.environ.get("SHOPFRONT_USER_STORE", "file").strip().lower()
        seed_products = (
            os.environ.get("SHOPFRONT_SEED_PRODUCTS", "true").strip().lower() in _TRUTHY
        )
        host = os.environ.get("SHOPFRONT_HOST", "127.0.0.1")
        port = int(os.environ.get("SHOPFRONT_PORT", "5000"))

        config = cls(
            secret_key=secret_key,
            log_level=log_level,
            data_dir=data_dir,
            user_store=user_store,
            seed_products=seed_products,
            host=host,
            port=port,
        )
        config.validate()
        config.data_dir.mkdir(parents=True, exist_ok=True)
        return config

    def validate(self) -> None:
        if self.user_store not in USER_STORE_BACKENDS:
            raise ValueError(
                f"Unknown user store backend {self.user_store!r}; "
                f"expected one of {sorted(USER_STORE_BACKENDS)}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level {self.log_level!r}; expected one of {sorted(LOG_LEVELS)}"
            )
