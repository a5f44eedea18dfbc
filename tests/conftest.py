import copy

import pytest

from shopfront.app import create_app
from shopfront.common.schemas import ProductCreate
from shopfront.config import ShopConfig
from shopfront.services import InMemoryUserRepository, ProductRepository

SAMPLE_PRODUCT = {
    "title": "Canvas Tote",
    "body_html": "<p>Heavy canvas tote with reinforced handles and an inner pocket.</p>",
    "vendor": "Bag Works",
    "product_type": "Bag",
    "tags": ["canvas", "tote"],
    "options": [{"name": "Color", "values": ["Natural", "Black"]}],
    "images": [{"src": "https://cdn.example.com/tote.jpg", "alt": "Tote"}],
    "variants": [
        {"title": "Natural", "price": 24.5, "inventory_quantity": 3, "option_values": ["Natural"]},
        {"title": "Black", "price": 19.0, "inventory_quantity": 0, "option_values": ["Black"]},
    ],
}


@pytest.fixture
def product_payload():
    return copy.deepcopy(SAMPLE_PRODUCT)


@pytest.fixture
def product_repo(tmp_path):
    return ProductRepository(tmp_path / "products.json", seed=False)


@pytest.fixture
def created_product(product_repo, product_payload):
    return product_repo.create_product(ProductCreate(**product_payload))


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def app(tmp_path):
    config = ShopConfig(
        secret_key="test-secret",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        user_store="memory",
        seed_products=True,
    )
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    client.post(
        "/api/auth/signup",
        json={"name": "Admin", "email": "admin@example.com", "password": "secret123"},
    )
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "secret123"})
    assert resp.status_code == 200
    return client
