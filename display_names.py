"""Display names and price labels for terminal and HTML output."""
from models import PricedItem

_VI_NAMES = {
    "CPU": "CPU",
    "CPUCooler": "Tản nhiệt CPU",
    "Motherboard": "Bo mạch chủ",
    "GraphicsCard": "Card đồ họa",
    "RAM": "RAM",
    "InternalHardDrive": "Ổ cứng",
    "SSD": "Ổ SSD",
    "HDD": "Ổ HDD",
    "Case": "Vỏ case",
    "PowerSupply": "Nguồn",
    "Monitor": "Màn hình",
    "Keyboard": "Bàn phím",
    "Mouse": "Chuột",
}

_EN_NAMES = {
    "CPU": "CPU",
    "CPUCooler": "CPU Cooler",
    "Motherboard": "Motherboard",
    "GraphicsCard": "Graphics Card",
    "RAM": "RAM",
    "InternalHardDrive": "Storage",
    "SSD": "SSD",
    "HDD": "HDD",
    "Case": "Case",
    "PowerSupply": "Power Supply",
    "Monitor": "Monitor",
    "Keyboard": "Keyboard",
    "Mouse": "Mouse",
}


def component_display_name(component_type: str, language: str = "vi") -> str:
    """Human label for a component type; unknown types are shown as-is."""
    names = _EN_NAMES if language == "en" else _VI_NAMES
    return names.get(component_type, component_type)


def format_vnd(amount) -> str:
    """Format an amount the way the storefront does: 1500000 -> "1.500.000đ"."""
    if amount is None:
        return "—"
    return f"{round(amount):,}".replace(",", ".") + "đ"


def discount_badge(item: PricedItem) -> str:
    """Badge text for a normalized product.

    Fixed discounts, and percentage ones that round below 1%, show the
    saving in đồng ("-60.000đ"); the rest show "-N%".
    """
    if not item.is_discounted or item.original_price is None or item.price is None:
        return ""
    saving = item.original_price - item.price
    percent = saving / item.original_price * 100
    if item.discount_type == "fixed" or percent < 1:
        return f"-{format_vnd(saving)}"
    return f"-{item.discount_percentage}%"
