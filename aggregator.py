"""Summary totals and the save payload for PC configurations."""
import logging
from collections.abc import Mapping

from models import (
    BuildComponent,
    ConfigurationMeta,
    PersistencePayload,
    as_component,
    coerce_number,
)
from storage import StorageClassifier, is_solid_state
from taxonomy import EXPLICIT_STORAGE_KEYS, map_for_persistence, standardize_component_type

logger = logging.getLogger(__name__)

DEFAULT_PURPOSE = "Cấu hình được tạo tự động"


def _attr(component, attr: str, key: str):
    if isinstance(component, BuildComponent):
        return getattr(component, attr)
    if isinstance(component, Mapping):
        return coerce_number(component.get(key))
    return None


def _sum(config: Mapping, attr: str, key: str) -> float:
    total = 0
    for component in config.values():
        value = _attr(component, attr, key)
        if value is not None:
            total += value
    return total


# These work on raw, parsed or mapped configurations alike.
def total_price(config: Mapping) -> float:
    return _sum(config, "price", "price")


def total_power(config: Mapping) -> float:
    return _sum(config, "tdp", "tdp")


def total_benchmark(config: Mapping) -> float:
    return _sum(config, "benchmark_score", "benchmarkScore")


def format_benchmark(total: float) -> str:
    """Benchmark total for display; 0 means "no data", shown as N/A."""
    if total == 0:
        return "N/A"
    return f"{total:.1f}"


def format_products_for_api(mapped: Mapping) -> list[dict]:
    """Convert a persistence-mapped configuration to the API product list.

    Components without an identifier cannot be saved and are skipped.
    """
    products = []
    for component_type, component in mapped.items():
        component = as_component(component)
        product_id = component.resolved_id
        if product_id in (None, "", []):
            logger.warning(f"Skipping product without an id for component type: {component_type}")
            continue

        standard_type = standardize_component_type(component_type)
        details = dict(component.details)
        if component_type in EXPLICIT_STORAGE_KEYS:
            details["type"] = component_type
            details["storageType"] = component_type
        details["originalType"] = component_type
        details["originalComponentType"] = component_type
        details.update({
            "brand": component.extra.get("brand"),
            "model": component.extra.get("model"),
            "tdp": component.tdp,
            "imageUrl": component.extra.get("imageUrl") or component.extra.get("image"),
        })

        price = component.price if component.price is not None else 0
        products.append({
            "componentType": standard_type,
            "productId": product_id,
            "category": component.extra.get("category") or standard_type,
            "name": component.name,
            "price": price,
            "details": details,
        })
    return products


def default_meta(index: int, user_input: str = "") -> ConfigurationMeta:
    return ConfigurationMeta(
        name=f"Cấu hình tự động #{index + 1}",
        purpose=user_input or DEFAULT_PURPOSE,
    )


def build_persistence_payload(
    config: Mapping,
    meta: ConfigurationMeta,
    classifier: StorageClassifier = is_solid_state,
) -> PersistencePayload:
    """Assemble what the persistence API receives for one build.

    Totals are taken over the build as generated, so every slot counts even
    if it could not be given a product id.
    """
    mapped = map_for_persistence(config, classifier)
    return PersistencePayload(
        name=meta.name,
        purpose=meta.purpose,
        products=format_products_for_api(mapped),
        total_price=total_price(config),
        wattage=total_power(config),
    )
