"""
contentgen: resolve template placeholders from JSON data sources.

Exports the public API:
- ContentGenerationService
- ResolutionPipeline / SimpleResolver
- DocumentStore / DocumentCache
- ValueFormatter
- load_config
"""
from .config import load_config
from .formatting import ValueFormatter
from .resolve import ResolutionPipeline, SimpleResolver
from .service import ContentGenerationService
from .sources import DocumentCache, DocumentStore

__version__ = "0.1.0"
