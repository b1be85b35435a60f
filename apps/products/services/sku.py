"""
SKU and slug generation.

SKUs already issued by the shop were built with ``generate_sku``, so its
output must stay byte-for-byte stable.
"""

import re
import time
from typing import Iterable

_WHITESPACE_RE = re.compile(r'\s+')
_SLUG_STRIP_RE = re.compile(r'[^\w\s-]', re.ASCII)
_HYPHEN_RUN_RE = re.compile(r'-+')

SKU_BASE_LENGTH = 4
SKU_FRAGMENT_LENGTH = 3
SKU_UNIQUE_SUFFIX_DIGITS = 6


def generate_sku(product_slug: str, attribute_values: Iterable[str]) -> str:
    """
    Build a SKU from a product slug and the ordered attribute value labels.

    Example:
        generate_sku('summer-tee', ['Large', 'Red']) -> 'SUMM-LAR-RED'

    With no attribute values the result keeps its trailing hyphen
    ('SUMM-'), matching SKUs that already exist for simple products.
    """
    base = product_slug.replace('-', '').upper()[:SKU_BASE_LENGTH]
    fragments = [
        _WHITESPACE_RE.sub('', value).upper()[:SKU_FRAGMENT_LENGTH]
        for value in attribute_values
    ]
    return f"{base}-{'-'.join(fragments)}"


def generate_unique_sku(product_slug: str, attribute_values: Iterable[str]) -> str:
    """
    Same as ``generate_sku`` with the low digits of the current epoch
    milliseconds appended. Only meant for callers that found the plain
    SKU already taken.
    """
    base_sku = generate_sku(product_slug, attribute_values)
    timestamp = str(int(time.time() * 1000))[-SKU_UNIQUE_SUFFIX_DIGITS:]
    return f"{base_sku}-{timestamp}"


def generate_slug(text: str) -> str:
    """Normalize free text into a URL-friendly slug."""
    slug = text.lower().strip()
    slug = _SLUG_STRIP_RE.sub('', slug)
    slug = _WHITESPACE_RE.sub('-', slug)
    slug = _HYPHEN_RUN_RE.sub('-', slug)
    return slug.strip('-')
