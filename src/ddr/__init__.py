"""
DDR package: weekly Deep Dive report formatter.

Layout:
- schemas: closed game taxonomy (biomes, objectives, mutators) as pydantic models
- codec: JSON document <-> ReportInput, with path-aware SchemaError
- render: ReportInput -> Discord-formatted text (pure)
- pipeline / cli: file I/O, run artifacts, logging
"""
