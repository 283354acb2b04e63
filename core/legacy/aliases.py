# core/legacy/aliases.py
import re
from typing import Dict, NamedTuple, Optional

from core.sa.models import ProductType


class DemoAlias(NamedTuple):
    title: re.Pattern
    type: ProductType


# Identifiers issued by the old static storefront, mapped onto catalog titles.
DEMO_ALIASES: Dict[str, DemoAlias] = {
    # Hindi editions: "ORIGIN CODE" but not "THE ORIGIN CODE"
    'efv_v1_ebook': DemoAlias(re.compile(r'^EFV™ VOL 1: ORIGIN CODE™$', re.IGNORECASE), ProductType.EBOOK),
    'efv_v1_audiobook': DemoAlias(re.compile(r'^EFV™ VOL 1: ORIGIN CODE™$', re.IGNORECASE), ProductType.AUDIOBOOK),

    # English editions
    'efv_v1_ebook_en': DemoAlias(re.compile(r'THE ORIGIN CODE', re.IGNORECASE), ProductType.EBOOK),
    'efv_v1_audiobook_en': DemoAlias(re.compile(r'THE ORIGIN CODE', re.IGNORECASE), ProductType.AUDIOBOOK),

    'efv_v2_ebook': DemoAlias(re.compile(r'MINDOS', re.IGNORECASE), ProductType.EBOOK),
    'efv_v2_audiobook': DemoAlias(re.compile(r'MINDOS', re.IGNORECASE), ProductType.AUDIOBOOK),
}


def lookup_alias(product_id: Optional[str]) -> Optional[DemoAlias]:
    if not product_id:
        return None
    return DEMO_ALIASES.get(product_id)
