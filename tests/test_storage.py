# tests/test_storage.py
from models import BuildComponent
from storage import is_solid_state, resolve_storage_key


def test_explicit_type_tags():
    assert is_solid_state(BuildComponent(name="Drive", type="SSD")) is True
    assert is_solid_state(BuildComponent(name="Drive", storage_type="SSD")) is True
    assert is_solid_state(BuildComponent(name="Drive", details={"storageType": "SSD"})) is True


def test_name_indicators():
    assert is_solid_state(BuildComponent(name="Samsung 990 PRO NVMe 2TB")) is True
    assert is_solid_state(BuildComponent(name="Crucial MX500 Solid State Drive")) is True
    assert is_solid_state(BuildComponent(name="WD SN770 M.2 1TB")) is True


def test_form_factor_and_interface():
    assert is_solid_state(BuildComponent(name="Generic", form_factor="2.5")) is True
    assert is_solid_state(BuildComponent(name="Generic", form_factor="M.2")) is True
    assert is_solid_state(BuildComponent(name="Generic", interface="PCIe 4.0 x4")) is True


def test_spinning_disk():
    assert is_solid_state(BuildComponent(name="Seagate Barracuda 2TB 7200RPM", form_factor="3.5",
                                         interface="SATA 6Gb/s")) is False
    assert is_solid_state(None) is False


def test_resolve_storage_key():
    assert resolve_storage_key(BuildComponent(name="Kingston NV2 NVMe")) == "SSD"
    assert resolve_storage_key(BuildComponent(name="WD Blue 1TB")) == "HDD"


def test_resolve_storage_key_classifier_error():
    def broken(component):
        raise ValueError("bad data")

    assert resolve_storage_key(BuildComponent(name="Anything"), broken) == "HDD"
