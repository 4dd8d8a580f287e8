"""
Shipping zone selection.

Picks the zone that covers a destination country. Zones are checked in the
order the store returns them, which is the store owner's priority order, and
the first zone listing the country wins. Without a match we prefer a real zone
over the store's catch-all bucket, and only then take whatever comes first.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from src.integrations.contracts.commerce import CommerceClient, ShippingZone, UpstreamError, ZoneLocation

logger = logging.getLogger(__name__)

CATCH_ALL_ZONE_NAME = "Locations not covered by your other zones"


class NoZonesAvailable(Exception):
    def __init__(self, message: str = "No shipping zones available") -> None:
        super().__init__(message)


def covers_country(locations: Sequence[ZoneLocation], country_code: Optional[str]) -> bool:
    if not country_code:
        return False
    return any(loc.type == "country" and loc.code == country_code for loc in locations)


async def resolve_zone(
    client: CommerceClient,
    zones: Sequence[ShippingZone],
    country_code: Optional[str],
    *,
    catch_all_name: str = CATCH_ALL_ZONE_NAME,
) -> ShippingZone:
    """Return the zone covering ``country_code``, falling back as described above.

    Location lookups run one zone at a time so that the first matching zone in
    store order wins. A zone whose locations cannot be fetched is skipped.

    Raises:
        NoZonesAvailable: if ``zones`` is empty or none of them has an id.
    """
    if not zones:
        raise NoZonesAvailable()

    checked: List[ShippingZone] = []
    for zone in zones:
        if zone.id is None:
            logger.warning("Skipping shipping zone without an id: %s", zone.name or zone.raw)
            continue
        try:
            locations = await client.list_zone_locations(zone.id)
        except UpstreamError as e:
            logger.warning("Could not fetch locations for zone %s: %s", zone.id, e)
            checked.append(zone)
            continue

        zone = zone.model_copy(update={"locations": locations})
        checked.append(zone)
        if covers_country(locations, country_code):
            logger.info("Found matching zone: %s for country %s", zone.name, country_code)
            return zone

    if not checked:
        raise NoZonesAvailable()

    selected = next((z for z in checked if z.name != catch_all_name), checked[0])
    logger.info("Using fallback zone: %s (ID: %s)", selected.name, selected.id)
    return selected
