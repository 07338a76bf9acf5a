"""Rendering functions: analysis results -> files.

  - report: write_effort_csv (the effort.csv deliverable)
  - cells_map: build_cells_figure, save_figure (illustrative grid-cell plot)

Renderers take data frames, never fetch, and carry no Prefect decorators.
Used by flows/build.py.
"""
