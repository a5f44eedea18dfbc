from typing import Any, Dict


def min_variant_price(product: Dict) -> float:
    prices = [float(v.get("price", 0) or 0) for v in product.get("variants") or []]
    return min(prices) if prices else 0


def to_product_list_item(product: Dict) -> Dict:
    item = dict(product)
    item["min_price"] = min_variant_price(product)
    return item


def to_public_user(user: Any) -> Dict:
    return {
        "id": getattr(user, "id", None),
        "name": getattr(user, "name", None),
        "email": getattr(user, "email", None),
    }
