"""IOC-UNESCO harmful algal bloom (HAB) monitoring regions.

The region shapefile identifies each polygon by an integer ``hab_region``
attribute (1-13). Reports use the short codes below.
"""

from __future__ import annotations

#: Column in the region shapefile holding the region id.
REGION_ID_COLUMN = "hab_region"

REGION_CODES: dict[int, str] = {
    1: "ECA",  # East coast of the Americas
    2: "WCA",  # West coast of the Americas
    3: "CCA",  # Central America and Caribbean
    4: "SAM",  # South America
    5: "EUR",  # Europe (ICES area)
    6: "MED",  # Mediterranean
    7: "NAF",  # North Africa
    8: "BEN",  # Benguela
    9: "IND",  # Indian Ocean
    10: "NAS",  # North Asia
    11: "SEA",  # South-East Asia
    12: "ANZ",  # Australia and New Zealand
    13: "PAC",  # Pacific islands
}


class UnknownRegionError(KeyError):
    """A region id or code that has no entry in ``REGION_CODES``."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


def region_code(region_id: int) -> str:
    """Return the short code for a region id.

    Raises:
        UnknownRegionError: If the id is not in ``REGION_CODES``. This usually
            means the region shapefile and this table have drifted apart.
    """
    try:
        return REGION_CODES[int(region_id)]
    except KeyError:
        msg = f"Unknown HAB region id {region_id!r} (known: 1-{max(REGION_CODES)})"
        raise UnknownRegionError(msg) from None


def region_id(code: str) -> int:
    """Inverse of ``region_code``."""
    for rid, known in REGION_CODES.items():
        if known == code.upper():
            return rid
    msg = f"Unknown HAB region code {code!r}"
    raise UnknownRegionError(msg)
