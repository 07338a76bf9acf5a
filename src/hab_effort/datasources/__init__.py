"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, paging (optional)
    └── {feature}.py      # Fetch/parse functions

Sources:
  - obis/     Phytoplankton occurrence points (OBIS v3 API)
  - regions/  HAB region polygons (zipped shapefile)

Fetch functions return data frames and raise on failure; caching is the
caller's concern (see ``flows/fetch.py`` and ``store.py``).
"""
