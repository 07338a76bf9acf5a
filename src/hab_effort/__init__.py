"""HAB Effort - phytoplankton sampling effort per harmful-algal-bloom region.

Architecture::

    datasources/   External data (OBIS occurrences, HAB region shapefile)
    store.py       File-backed cache (reference → historical → derived)
    analysis/      Pure pipeline steps (time, spatial join, grid, effort)
    renderers/     Outputs (effort.csv report, grid-cell facet plot)
    flows/         Prefect orchestration (fetch fills caches, build writes report)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources → store (cache) → analysis → renderers

Effort is the number of distinct (month, grid cell) pairs with at least one
occurrence, per region and year.
"""

__version__ = "0.1.0"

from hab_effort.config import Settings
from hab_effort.schemas import EffortRecord

__all__ = ["EffortRecord", "Settings", "__version__"]
