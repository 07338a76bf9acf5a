"""HAB region polygon data source.

The IOC-UNESCO HAB regions are distributed as a zipped shapefile with one
(multi)polygon per region and an integer ``hab_region`` attribute.

Public API:
  - shapefile: download_regions, read_regions, validate_regions, RegionDataError
"""

from hab_effort.datasources.regions.shapefile import (
    RegionDataError,
    download_regions,
    read_regions,
    validate_regions,
)

__all__ = [
    "RegionDataError",
    "download_regions",
    "read_regions",
    "validate_regions",
]
