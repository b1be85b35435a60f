from types import SimpleNamespace

from apps.products.services import sku as sku_module
from apps.products.services.sku import generate_sku, generate_slug, generate_unique_sku


def test_generate_sku_from_slug_and_labels():
    assert generate_sku('summer-tee', ['Large', 'Red']) == 'SUMM-LAR-RED'


def test_generate_sku_is_deterministic():
    results = {generate_sku('summer-tee', ['Large', 'Red']) for _ in range(5)}
    assert results == {'SUMM-LAR-RED'}


def test_generate_sku_without_labels_keeps_trailing_hyphen():
    assert generate_sku('summer-tee', []) == 'SUMM-'


def test_generate_sku_removes_whitespace_inside_labels():
    assert generate_sku('summer-tee', ['Navy Blue', ' x l ']) == 'SUMM-NAV-XL'


def test_generate_sku_short_slug_and_labels():
    assert generate_sku('a-b', ['s', 'XL']) == 'AB-S-XL'


def test_generate_sku_truncation_can_collide():
    assert generate_sku('summer-tee', ['Blue']) == generate_sku('summer-tee', ['Bluebell'])


def test_generate_unique_sku_appends_low_timestamp_digits(monkeypatch):
    monkeypatch.setattr(sku_module, 'time', SimpleNamespace(time=lambda: 1712345678.0))
    assert generate_unique_sku('summer-tee', ['Large', 'Red']) == 'SUMM-LAR-RED-678000'


def test_generate_slug():
    assert generate_slug('  Summer Tee!  ') == 'summer-tee'
    assert generate_slug('Café -- Deluxe  Edition') == 'caf-deluxe-edition'
    assert generate_slug('--hello--') == 'hello'
