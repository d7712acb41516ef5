"""Conversion between catalog entities and stored JSON records."""
from datetime import datetime
from typing import Any, Dict

from x402_sales.domain.entities.product import Product
from x402_sales.domain.entities.vendor import Vendor


def vendor_to_record(vendor: Vendor) -> Dict[str, Any]:
    return {
        "id": vendor.id,
        "name": vendor.name,
        "evm_address": vendor.evm_address,
        "api_key": vendor.api_key,
        "created_at": vendor.created_at.isoformat(),
    }


def vendor_from_record(record: Dict[str, Any]) -> Vendor:
    return Vendor.reconstruct(
        id=record["id"],
        name=record["name"],
        evm_address=record["evm_address"],
        api_key=record["api_key"],
        created_at=datetime.fromisoformat(record["created_at"]) if record.get("created_at") else None,
    )


def product_to_record(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "vendor_id": product.vendor_id,
        "path": product.path,
        "price": product.price,
        "network": product.network,
        "description": product.description,
        "mime_type": product.mime_type,
        "data": product.data,
        "status": product.status.value,
        "created_at": product.created_at.isoformat(),
    }


def product_from_record(record: Dict[str, Any]) -> Product:
    return Product.reconstruct(
        id=record["id"],
        vendor_id=record["vendor_id"],
        path=record["path"],
        price=record["price"],
        network=record["network"],
        description=record.get("description", ""),
        mime_type=record["mime_type"],
        data=record.get("data", ""),
        status=record.get("status", "active"),
        created_at=datetime.fromisoformat(record["created_at"]) if record.get("created_at") else None,
    )
