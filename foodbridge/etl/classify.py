"""Heuristic EBT and stock-level estimates.

Neither value is verified: EBT acceptance is inferred from the shop category
and "well stocked" from size proxies (category, chain brand, hub-like names).
None means no rule matched and must not be read as "no".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from foodbridge.models import Domain

EBT_LIKELY_SHOPS = frozenset({"supermarket", "grocery"})
EBT_UNLIKELY_SHOPS = frozenset({"convenience"})
LARGE_CHAIN_MARKERS = ("walmart", "target", "kroger", "safeway", "whole foods")
HUB_NAME_MARKERS = ("regional", "central")


@dataclass(frozen=True)
class Classification:
    accepts_ebt: Optional[bool] = None
    well_stocked: Optional[bool] = None


def estimate_ebt(tags: Dict[str, str], domain: Domain) -> Optional[bool]:
    if domain is not Domain.GROCERY:
        return None
    shop = tags.get("shop")
    if not isinstance(shop, str):
        return None
    if shop in EBT_LIKELY_SHOPS:
        return True
    if shop in EBT_UNLIKELY_SHOPS:
        return False
    return None


def estimate_well_stocked(tags: Dict[str, str], domain: Domain, name: Optional[str] = None) -> Optional[bool]:
    if domain is Domain.GROCERY:
        if tags.get("shop") == "supermarket":
            return True
        brand = str(tags.get("brand") or "").lower()
        if brand and any(marker in brand for marker in LARGE_CHAIN_MARKERS):
            return True
        return None

    if tags.get("amenity") == "social_facility":
        return True
    lowered = str(name or tags.get("name") or "").lower()
    if any(marker in lowered for marker in HUB_NAME_MARKERS):
        return True
    return None


def classify(tags: Dict[str, str], domain: Domain, name: Optional[str] = None) -> Classification:
    return Classification(
        accepts_ebt=estimate_ebt(tags, domain),
        well_stocked=estimate_well_stocked(tags, domain, name),
    )
