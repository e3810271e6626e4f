"""Solid-state vs spinning-disk classification for storage components."""
import logging
import re
from collections.abc import Callable

from models import BuildComponent

logger = logging.getLogger(__name__)

_SSD_NAME_RE = re.compile(r"ssd|solid\s*state|nvme|m\.2|pcie", re.IGNORECASE)
_SSD_INTERFACE_RE = re.compile(r"nvme|pcie", re.IGNORECASE)

StorageClassifier = Callable[[BuildComponent], bool]


def is_solid_state(component: BuildComponent | None) -> bool:
    """Guess whether a storage component is an SSD.

    Explicit type tags win; then the product name, form factor and
    interface are checked. Anything unrecognised is treated as an HDD.
    """
    if component is None:
        return False
    details = component.details or {}
    if "SSD" in (
        component.type,
        component.storage_type,
        details.get("type"),
        details.get("storageType"),
    ):
        return True
    if component.name and _SSD_NAME_RE.search(component.name):
        return True
    if component.form_factor in ("2.5", "M.2"):
        return True
    if isinstance(component.interface, str) and _SSD_INTERFACE_RE.search(component.interface):
        return True
    return False


def resolve_storage_key(
    component: BuildComponent,
    classifier: StorageClassifier = is_solid_state,
) -> str:
    """Return "SSD" or "HDD" for a generic storage component.

    A classifier that raises resolves to "HDD".
    """
    try:
        return "SSD" if classifier(component) else "HDD"
    except Exception as e:
        logger.warning(f"Storage classifier failed for {component.name or component.resolved_id!r}: {e}; using HDD")
        return "HDD"
