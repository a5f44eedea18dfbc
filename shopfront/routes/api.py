"""商品目錄 JSON API 路由。"""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from ..common.schemas import ProductCreate, ProductUpdate
from ..common.services.logging import log_event
from ..common.utils.validators import validate_payload
from .auth import current_user

logger = logging.getLogger(__name__)

MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

api_bp = Blueprint("shopfront_api", __name__, url_prefix="/api")


def _components() -> Dict[str, Any]:
    return current_app.extensions["shopfront_components"]


def _not_found(product_id: str):
    return jsonify({"error": f"Product {product_id} not found"}), 404


@api_bp.before_request
def guard_mutations():
    if request.method in MUTATING_METHODS and current_user() is None:
        return jsonify({"error": "Authentication required"}), 401
    return None


@api_bp.get("/products")
def list_products():
    repo = _components()["product_repo"]
    return jsonify({"data": repo.list_products()})


@api_bp.get("/products/<product_id>")
def get_product(product_id: str):
    product = _components()["product_repo"].get_product(product_id)
    if product is None:
        return _not_found(product_id)
    return jsonify({"data": product})


@api_bp.post("/products")
def create_product():
    outcome = validate_payload(ProductCreate, request.get_json(silent=True))
    if not outcome.ok:
        return jsonify({"error": "Validation failed", "issues": outcome.errors}), 400

    try:
        product = _components()["product_repo"].create_product(outcome.value)
    except OSError:
        logger.exception("Error creating product")
        return jsonify({"error": "Unexpected error creating product"}), 500

    log_event("info", "product.created", product_id=product["id"], variants=len(product["variants"]))
    return jsonify({"data": product}), 201


@api_bp.route("/products/<product_id>", methods=["PUT", "PATCH"])
def update_product(product_id: str):
    outcome = validate_payload(ProductUpdate, request.get_json(silent=True))
    if not outcome.ok:
        return jsonify({"error": "Validation failed", "issues": outcome.errors}), 400

    try:
        updated = _components()["product_repo"].update_product(product_id, outcome.value)
    except OSError:
        logger.exception("Error updating product %s", product_id)
        return jsonify({"error": "Unexpected error updating product"}), 500

    if updated is None:
        return _not_found(product_id)

    log_event("info", "product.updated", product_id=product_id, fields=sorted(outcome.value.model_fields_set))
    return jsonify({"data": updated})


@api_bp.delete("/products/<product_id>")
def delete_product(product_id: str):
    try:
        deleted = _components()["product_repo"].delete_product(product_id)
    except OSError:
        logger.exception("Error deleting product %s", product_id)
        return jsonify({"error": "Unexpected error deleting product"}), 500

    if not deleted:
        return _not_found(product_id)

    log_event("info", "product.deleted", product_id=product_id)
    return jsonify({"success": True})
