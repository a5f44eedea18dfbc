"""Shopfront 商品目錄 Flask 應用。"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask

from .common.services.logging import configure_logging
from .config import ShopConfig
from .routes import api, auth
from .services import InMemoryUserRepository, JsonFileUserRepository, ProductRepository

logger = logging.getLogger(__name__)


def build_components(config: ShopConfig) -> Dict[str, Any]:
    """建立整個行程共用的儲存庫實例，交給路由使用前即完成初始化。"""

    if config.user_store == "memory":
        user_repo = InMemoryUserRepository()
    else:
        user_repo = JsonFileUserRepository(config.users_data_file)

    product_repo = ProductRepository(config.products_data_file, seed=config.seed_products)
    logger.info(
        "Product store at %s; %s user store with %d account(s)",
        product_repo.data_file,
        config.user_store,
        user_repo.count_users(),
    )
    return {
        "product_repo": product_repo,
        "user_repo": user_repo,
    }


def create_app(config: Optional[ShopConfig] = None) -> Flask:
    config = config or ShopConfig.load()
    config.validate()
    configure_logging(config.log_level)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["SHOPFRONT_CONFIG"] = config
    app.json.sort_keys = False

    app.extensions["shopfront_components"] = build_components(config)

    app.register_blueprint(auth.auth_bp)
    app.register_blueprint(api.api_bp)

    return app


def main() -> None:
    app = create_app()
    config = app.config["SHOPFRONT_CONFIG"]
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == "__main__":
    main()
