"""Data models for the PC build normalizer."""
import math
from collections.abc import Mapping
from dataclasses import dataclass, field

DISCOUNT_TYPES = ("percentage", "fixed")
DISCOUNT_SOURCES = ("automatic", "manual")


class MalformedComponentError(ValueError):
    """A build component record has a shape the mapper cannot work with."""


def coerce_number(value) -> int | float | None:
    """Best-effort conversion of a raw JSON value to a number.

    Ints and finite floats pass through. Strings are accepted with thousands
    separators ("1,500,000"). Booleans, NaN, infinities and anything else
    come back as None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def _coerce_percentage(value) -> int | None:
    number = coerce_number(value)
    if number is None:
        return None
    rounded = int(math.floor(number + 0.5))
    if rounded < 1 or rounded > 100:
        return None
    return rounded


def _choice(value, allowed: tuple) -> str | None:
    return value if value in allowed else None


_PRICED_ITEM_KEYS = {
    "id", "name", "price", "originalPrice", "discountPercentage",
    "discountType", "discountSource", "isDiscounted", "categories", "category",
}


@dataclass
class PricedItem:
    """A catalog product as seen by discount normalization.

    Keys the catalog sends that are not modelled here ride along in
    ``extra`` and come back out of ``to_dict`` untouched.
    """
    id: str | int | None = None
    name: str = ""
    price: int | float | None = None
    original_price: int | float | None = None
    discount_percentage: int | None = None
    discount_type: str | None = None  # "percentage" | "fixed"
    discount_source: str | None = None  # "automatic" | "manual"
    is_discounted: bool | None = None
    categories: list[str] | None = None
    category: str | None = None  # legacy single category
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, record: Mapping) -> "PricedItem":
        categories = record.get("categories")
        category = record.get("category")
        is_discounted = record.get("isDiscounted")
        return cls(
            id=record.get("id"),
            name=record.get("name") or "",
            price=coerce_number(record.get("price")),
            original_price=coerce_number(record.get("originalPrice")),
            discount_percentage=_coerce_percentage(record.get("discountPercentage")),
            discount_type=_choice(record.get("discountType"), DISCOUNT_TYPES),
            discount_source=_choice(record.get("discountSource"), DISCOUNT_SOURCES),
            is_discounted=is_discounted if isinstance(is_discounted, bool) else None,
            categories=list(categories) if isinstance(categories, list) else None,
            category=category if isinstance(category, str) and category else None,
            extra={k: v for k, v in record.items() if k not in _PRICED_ITEM_KEYS},
        )

    def to_dict(self) -> dict:
        record = dict(self.extra)
        if self.id is not None:
            record["id"] = self.id
        record["name"] = self.name
        record["price"] = self.price
        optional = {
            "originalPrice": self.original_price,
            "discountPercentage": self.discount_percentage,
            "discountType": self.discount_type,
            "discountSource": self.discount_source,
            "isDiscounted": self.is_discounted,
            "categories": self.categories,
            "category": self.category,
        }
        for key, value in optional.items():
            if value is not None:
                record[key] = value
        return record


_COMPONENT_KEYS = {
    "id", "partId", "name", "price", "tdp", "benchmarkScore", "details",
    "componentType", "type", "storageType", "formFactor", "interface",
}


@dataclass
class BuildComponent:
    """One selected part inside a PC configuration."""
    id: str | int | None = None
    part_id: str | list | None = None  # legacy identifier
    name: str = ""
    price: int | float | None = None
    tdp: int | float | None = None  # watts
    benchmark_score: int | float | None = None
    details: dict = field(default_factory=dict)
    component_type: str | None = None
    type: str | None = None  # storage: "SSD" | "HDD"
    storage_type: str | None = None
    form_factor: str | None = None
    interface: str | None = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, record) -> "BuildComponent":
        if not isinstance(record, Mapping):
            raise MalformedComponentError(
                f"component must be an object, got {type(record).__name__}"
            )
        details = record.get("details")
        if details is None:
            details = {}
        elif not isinstance(details, Mapping):
            raise MalformedComponentError(
                f"component details must be an object, got {type(details).__name__}"
            )
        return cls(
            id=record.get("id"),
            part_id=record.get("partId"),
            name=record.get("name") or "",
            price=coerce_number(record.get("price")),
            tdp=coerce_number(record.get("tdp")),
            benchmark_score=coerce_number(record.get("benchmarkScore")),
            details=dict(details),
            component_type=record.get("componentType"),
            type=record.get("type"),
            storage_type=record.get("storageType"),
            form_factor=record.get("formFactor"),
            interface=record.get("interface"),
            extra={k: v for k, v in record.items() if k not in _COMPONENT_KEYS},
        )

    @property
    def resolved_id(self):
        """``id`` when set, else the legacy ``partId``."""
        if self.id not in (None, ""):
            return self.id
        return self.part_id

    def to_dict(self) -> dict:
        record = dict(self.extra)
        fields = {
            "id": self.id,
            "partId": self.part_id,
            "name": self.name,
            "price": self.price,
            "tdp": self.tdp,
            "benchmarkScore": self.benchmark_score,
            "componentType": self.component_type,
            "type": self.type,
            "storageType": self.storage_type,
            "formFactor": self.form_factor,
            "interface": self.interface,
        }
        for key, value in fields.items():
            if value is not None:
                record[key] = value
        record["details"] = dict(self.details)
        return record


def as_component(value) -> BuildComponent:
    if isinstance(value, BuildComponent):
        return value
    return BuildComponent.from_dict(value)


def parse_configuration(raw: Mapping) -> dict[str, BuildComponent]:
    """Build a configuration (taxonomy key -> component) from a raw event.

    Empty slots (None / {}) are skipped. Raises MalformedComponentError for
    anything that is not a usable component.
    """
    if not isinstance(raw, Mapping):
        raise MalformedComponentError(
            f"configuration must be an object, got {type(raw).__name__}"
        )
    config = {}
    for key, value in raw.items():
        if not value:
            continue
        config[key] = as_component(value)
    return config


def configuration_to_dict(config: Mapping) -> dict:
    return {key: as_component(c).to_dict() for key, c in config.items()}


@dataclass
class MappingResult:
    """Outcome of remapping a configuration for the editor.

    ``status`` is "ok" for a full mapping, or "degraded" when the mapper fell
    back to the minimal CPU/RAM/GPU subset; ``reason`` then says why.
    """
    components: dict[str, BuildComponent] = field(default_factory=dict)
    status: str = "ok"
    reason: str = ""

    @classmethod
    def ok(cls, components: dict) -> "MappingResult":
        return cls(components=components)

    @classmethod
    def degraded(cls, components: dict, reason: str) -> "MappingResult":
        return cls(components=components, status="degraded", reason=reason)

    @property
    def is_degraded(self) -> bool:
        return self.status == "degraded"


@dataclass
class ConfigurationMeta:
    name: str
    purpose: str = ""


@dataclass
class PersistencePayload:
    name: str
    purpose: str
    products: list[dict] = field(default_factory=list)
    total_price: float = 0.0
    wattage: float = 0.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "purpose": self.purpose,
            "products": self.products,
            "totalPrice": self.total_price,
            "wattage": self.wattage,
        }
