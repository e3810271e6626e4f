"""Remap generated PC builds into the editor and persistence taxonomies.

The build generator keys components by its own names (``GraphicsCard``,
``InternalHardDrive``, ...). The manual editor expects its Vietnamese slot
labels and explicit SSD/HDD slots, while persistence keeps the generator's
names but still needs storage split into SSD/HDD.
"""
import dataclasses
import logging
from collections.abc import Mapping

from models import BuildComponent, MalformedComponentError, MappingResult, as_component
from storage import StorageClassifier, is_solid_state, resolve_storage_key

logger = logging.getLogger(__name__)

STORAGE_KEY = "InternalHardDrive"
EXPLICIT_STORAGE_KEYS = ("SSD", "HDD")

# generator key -> manual editor slot
EDITOR_KEYS = {
    "CPU": "CPU",
    "CPUCooler": "Quạt tản nhiệt",
    "Motherboard": "Bo mạch chủ",
    "GraphicsCard": "Card đồ họa",
    "RAM": "RAM",
    "Case": "Vỏ case",
    "PowerSupply": "Nguồn",
}

# What the editor still gets when the full mapping blows up
FALLBACK_KEYS = {
    "CPU": "CPU",
    "RAM": "RAM",
    "GraphicsCard": "Card đồ họa",
}

# Any label seen in the storefront -> backend component type
COMPONENT_TYPE_MAPPING = {
    "CPU": "CPU",
    "CPUCooler": "CPUCooler",
    "CPU Cooler": "CPUCooler",
    "Motherboard": "Motherboard",
    "RAM": "RAM",
    "Memory": "RAM",
    "GraphicsCard": "GraphicsCard",
    "Graphics Card": "GraphicsCard",
    "GPU": "GraphicsCard",
    "InternalHardDrive": "InternalHardDrive",
    "Storage": "InternalHardDrive",
    "Case": "Case",
    "PowerSupply": "PowerSupply",
    "Power Supply": "PowerSupply",
    "PSU": "PowerSupply",
    "Bo mạch chủ": "Motherboard",
    "Quạt tản nhiệt": "CPUCooler",
    "Card đồ họa": "GraphicsCard",
    "Bộ nhớ": "RAM",
    "Lưu trữ": "InternalHardDrive",
    "Ổ cứng": "InternalHardDrive",
    "Ổ SSD": "InternalHardDrive",
    "Vỏ case": "Case",
    "Nguồn": "PowerSupply",
    "Nguồn máy tính": "PowerSupply",
    "Màn hình": "Monitor",
    "Bàn phím": "Keyboard",
    "Chuột": "Mouse",
    "Card mạng không dây": "WiFiCard",
    "Card mạng có dây": "WiredNetworkCard",
    "Kem tản nhiệt": "ThermalPaste",
}

COMPONENT_ORDER = [
    "CPU",
    "CPUCooler",
    "Motherboard",
    "RAM",
    "GraphicsCard",
    "SSD",
    "HDD",
    "InternalHardDrive",
    "Case",
    "PowerSupply",
    "Monitor",
    "Keyboard",
    "Mouse",
]


def standardize_component_type(label: str) -> str:
    """Map any storefront label to the backend component type.

    SSD and HDD are stored as InternalHardDrive; unknown labels pass through.
    """
    if not label:
        return ""
    if label in EXPLICIT_STORAGE_KEYS:
        return STORAGE_KEY
    return COMPONENT_TYPE_MAPPING.get(label, label)


def organize_in_order(config: Mapping) -> dict:
    """Reorder a configuration's keys for display.

    Known component types come first in COMPONENT_ORDER, the rest follow in
    their original order.
    """
    ordered = {key: config[key] for key in COMPONENT_ORDER if config.get(key)}
    for key, component in config.items():
        if key not in ordered:
            ordered[key] = component
    return ordered


def _copy(component: BuildComponent, **changes) -> BuildComponent:
    changes.setdefault("details", dict(component.details))
    return dataclasses.replace(
        component,
        id=component.resolved_id,
        extra=dict(component.extra),
        **changes,
    )


def _map_storage(config: Mapping, classifier: StorageClassifier, out: dict) -> None:
    storage = config.get(STORAGE_KEY)
    if storage:
        storage = as_component(storage)
        key = resolve_storage_key(storage, classifier)
        out[key] = _copy(
            storage,
            component_type=STORAGE_KEY,
            type=key,
            storage_type=key,
            details={**storage.details, "type": key, "storageType": key},
        )
        logger.debug(f"Mapped {STORAGE_KEY} to {key}")

    # Explicit SSD/HDD entries are independent of the generic drive. If both
    # land on the same key the explicit one owns it.
    for key in EXPLICIT_STORAGE_KEYS:
        explicit = config.get(key)
        if not explicit:
            continue
        explicit = as_component(explicit)
        out[key] = _copy(explicit, component_type=key, type=key, storage_type=key)


def _require_mapping(config) -> None:
    if not isinstance(config, Mapping):
        raise MalformedComponentError(
            f"configuration must be an object, got {type(config).__name__}"
        )


def _map_all_for_editing(config: Mapping, classifier: StorageClassifier) -> dict:
    _require_mapping(config)
    out = {}
    for source_key, editor_key in EDITOR_KEYS.items():
        component = config.get(source_key)
        if not component:
            continue
        component = as_component(component)
        out[editor_key] = _copy(
            component,
            component_type=source_key,
            details={**component.details, "originalComponentType": source_key},
        )
    _map_storage(config, classifier, out)
    return out


def _fallback_for_editing(config) -> dict:
    out = {}
    if not isinstance(config, Mapping):
        return out
    for source_key, editor_key in FALLBACK_KEYS.items():
        component = config.get(source_key)
        if not component:
            continue
        try:
            component = as_component(component)
            details = component.details if isinstance(component.details, Mapping) else {}
            out[editor_key] = _copy(component, details=dict(details))
        except MalformedComponentError as e:
            logger.debug(f"Fallback mapping skipped {source_key}: {e}")
    return out


def map_for_editing(config: Mapping, classifier: StorageClassifier = is_solid_state) -> MappingResult:
    """Translate a generated build into the manual editor's slots.

    Never raises. If the full mapping fails the result is degraded: only
    CPU, RAM and the graphics card are carried over, and ``reason`` says
    why so the caller can tell the user.
    """
    try:
        return MappingResult.ok(_map_all_for_editing(config, classifier))
    except Exception as e:
        logger.warning(f"Full configuration mapping failed, using minimal mapping: {e}")
        return MappingResult.degraded(
            _fallback_for_editing(config),
            reason=f"Configuration could not be fully converted: {e}",
        )


def map_for_persistence(config: Mapping, classifier: StorageClassifier = is_solid_state) -> dict[str, BuildComponent]:
    """Translate a generated build for saving.

    Non-storage components keep their generator key and gain
    ``details.originalComponentType``; storage is routed as for the editor.
    Raises MalformedComponentError rather than saving a partial build.
    """
    _require_mapping(config)
    out = {}
    for key, component in config.items():
        if not component or key == STORAGE_KEY or key in EXPLICIT_STORAGE_KEYS:
            continue
        component = as_component(component)
        out[key] = _copy(
            component,
            details={**component.details, "originalComponentType": key},
        )
    _map_storage(config, classifier, out)
    return out
