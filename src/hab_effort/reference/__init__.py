"""Static reference data.

Lookup tables that don't change with downloads: HAB region ids and codes.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from hab_effort.reference.regions import REGION_CODES as REGION_CODES
from hab_effort.reference.regions import REGION_ID_COLUMN as REGION_ID_COLUMN
from hab_effort.reference.regions import UnknownRegionError as UnknownRegionError
from hab_effort.reference.regions import region_code as region_code
from hab_effort.reference.regions import region_id as region_id
