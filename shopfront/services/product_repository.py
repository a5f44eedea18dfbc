"""管理商品目錄資料的檔案型儲存模組。

整個商品集合存放在單一 JSON 陣列檔案中；每次操作都重新讀取整份檔案，
變更後再整份寫回（最後寫入者為準，不提供跨請求鎖定）。
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from ..common.schemas import ProductCreate, ProductUpdate
from ..common.utils.dto import to_product_list_item

logger = logging.getLogger(__name__)

Product = Dict[str, Any]

# 寫入 JSON 時的欄位順序
PRODUCT_FIELDS = (
    "title",
    "body_html",
    "vendor",
    "product_type",
    "tags",
    "options",
    "images",
)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _new_id() -> str:
    return str(uuid4())


def assign_variant_ids(
    incoming: Sequence[Dict[str, Any]],
    existing: Optional[Sequence[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """為變體指定識別碼。

    明確提供的 id 一律保留；未提供時沿用原本同位置變體的 id，
    但若該 id 已被本次明確提供的 id 佔用則改為產生新的 id。
    """

    existing = existing or []
    claimed = {v["id"] for v in incoming if v.get("id")}
    resolved: List[Dict[str, Any]] = []
    for index, variant in enumerate(incoming):
        variant_id = variant.get("id")
        if not variant_id:
            positional = existing[index].get("id") if index < len(existing) else None
            if positional and positional not in claimed:
                variant_id = positional
                claimed.add(positional)
            else:
                variant_id = _new_id()
        entry = {"id": variant_id}
        entry.update({k: v for k, v in variant.items() if k != "id"})
        resolved.append(entry)
    return resolved


def merge_product(existing: Product, patch: Dict[str, Any], now: str) -> Product:
    """將部分更新合併到既有商品；patch 未提及的欄位保持不變。"""

    updated = dict(existing)
    for key, value in patch.items():
        if key == "variants":
            continue
        updated[key] = value
    if "variants" in patch:
        updated["variants"] = assign_variant_ids(patch["variants"], existing.get("variants") or [])
    updated["updated_at"] = now
    return updated


def build_seed_products(now: str) -> List[Product]:
    return [
        {
            "id": "prod-1",
            "title": "Sample T-Shirt",
            "body_html": "<p>A comfy cotton t-shirt for everyday wear.</p><p>Perfect for devs.</p>",
            "vendor": "Dev Merch Co.",
            "product_type": "Shirt",
            "tags": ["tshirt", "dev", "cotton"],
            "options": [
                {"id": "opt-size", "name": "Size", "values": ["S", "M", "L"]},
                {"id": "opt-color", "name": "Color", "values": ["Black", "White"]},
            ],
            "images": [
                {
                    "id": "img-1",
                    "src": "https://images.pexels.com/photos/7671166/pexels-photo-7671166.jpeg",
                    "alt": "Black t-shirt on hanger",
                }
            ],
            "variants": [
                {
                    "id": "var-1",
                    "title": "Black / M",
                    "price": 19.99,
                    "inventory_quantity": 10,
                    "sku": "TSHIRT-BLK-M",
                    "option_values": ["M", "Black"],
                },
                {
                    "id": "var-2",
                    "title": "White / M",
                    "price": 21.99,
                    "inventory_quantity": 5,
                    "sku": "TSHIRT-WHT-M",
                    "option_values": ["M", "White"],
                },
            ],
            "created_at": now,
            "updated_at": now,
            "published_at": now,
        }
    ]


class ProductRepository:
    """提供檔案型儲存的商品資料存取介面。"""

    def __init__(self, data_file: Path, *, seed: bool = True) -> None:
        self._data_file = data_file
        self._seed = seed
        self._ensure_file_exists()

    @property
    def data_file(self) -> Path:
        return self._data_file

    def list_products(self) -> List[Product]:
        """讀取全部商品，依儲存順序並附上最低售價。"""

        return [to_product_list_item(p) for p in self._load()]

    def get_product(self, product_id: str) -> Optional[Product]:
        """依識別碼取得商品。"""

        for item in self._load():
            if item.get("id") == product_id:
                return item
        return None

    def create_product(self, payload: ProductCreate) -> Product:
        """新增商品並整份寫回檔案。"""

        data = payload.model_dump(mode="json", exclude_unset=True)
        now = utc_now_iso()
        product: Product = {"id": _new_id()}
        product.update({key: data[key] for key in PRODUCT_FIELDS if key in data})
        product["variants"] = assign_variant_ids(data["variants"])
        product["created_at"] = now
        product["updated_at"] = now
        product["published_at"] = data.get("published_at") or now

        products = self._load()
        products.append(product)
        self._write(products)
        return product

    def update_product(self, product_id: str, patch: ProductUpdate) -> Optional[Product]:
        """更新商品資料，找不到時回傳 None。"""

        products = self._load()
        for index, entry in enumerate(products):
            if entry.get("id") == product_id:
                updated = merge_product(entry, patch.to_patch(), utc_now_iso())
                products[index] = updated
                self._write(products)
                return updated
        return None

    def delete_product(self, product_id: str) -> bool:
        """刪除指定商品。"""

        products = self._load()
        remaining = [item for item in products if item.get("id") != product_id]
        if len(remaining) == len(products):
            return False
        self._write(remaining)
        return True

    def _ensure_file_exists(self) -> None:
        if self._data_file.exists():
            return
        self._data_file.parent.mkdir(parents=True, exist_ok=True)
        seed = build_seed_products(utc_now_iso()) if self._seed else []
        self._write(seed)
        logger.info("Initialized product store %s with %d product(s)", self._data_file, len(seed))

    def _load(self) -> List[Product]:
        self._ensure_file_exists()
        try:
            text = self._data_file.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to read %s: %s", self._data_file, exc)
            return []
        if not text.strip():
            return []
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Malformed product store %s, reading as empty: %s", self._data_file, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Product store %s is not a JSON array, reading as empty", self._data_file)
            return []
        return [item for item in payload if isinstance(item, dict)]

    def _write(self, products: List[Product]) -> None:
        content = json.dumps(products, ensure_ascii=False, indent=2)
        # 每次寫入使用獨立暫存檔，再以 os.replace 原子地取代整份文件
        fd, tmp_name = tempfile.mkstemp(
            dir=self._data_file.parent, prefix=self._data_file.name + ".", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content + "\n")
            os.replace(tmp_name, self._data_file)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
