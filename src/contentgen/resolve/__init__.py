"""
Placeholder resolution.

Exports the public API:
- ResolutionPipeline (conditions, fallbacks, calculations, formatters)
- SimpleResolver (primary + fallbacks, global strict/default policy)
"""
from .pipeline import ResolutionPipeline
from .simple import SimpleResolver
