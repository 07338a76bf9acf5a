"""Pipeline steps between the raw inputs and the effort report.

Each module is a pure transformation of data frames: no I/O, no HTTP,
no Prefect decorators.

Modules (in pipeline order):
  - temporal: epoch-millisecond timestamps -> (year, month)
  - spatial_join: occurrence points + region polygons -> region_id per point
  - grid: latitude/longitude -> discrete global grid cell id
  - effort: enriched occurrences -> distinct cell-months per region/year

Dependency rule: analysis/ imports from reference/, schemas and config only.
It never fetches data or writes files.
"""
