"""
Diagnostic Extractors

Pluggable converters from raw build output to candidate entries.
"""

from buildwatch.parsing.extractors.base import DiagnosticExtractor, ExtractorRegistry
from buildwatch.parsing.extractors.gcc import GccExtractor

# Global registry instance
extractor_registry = ExtractorRegistry()
extractor_registry.register(GccExtractor(), "clang")

__all__ = [
    "DiagnosticExtractor",
    "ExtractorRegistry",
    "GccExtractor",
    "extractor_registry",
]
