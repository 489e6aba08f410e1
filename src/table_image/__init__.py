"""Render tab-separated tables as images with vertically merged cells.

Submodules:
  models      -- Grid, Span, and TableStructure Pydantic models
  errors      -- exception hierarchy
  loader      -- TSV text -> Grid
  spans       -- row-span calculation for merge columns
  builder     -- Grid + spans -> TableStructure
  validation  -- column-count check of a realized TableStructure
  markup      -- HTML rendering and re-parsing
  renderer    -- wkhtmltopdf / ImageMagick conversion to PNG
  config      -- .env-backed render settings
  pipeline    -- one-shot render pass
  cli         -- command-line entry point
"""
