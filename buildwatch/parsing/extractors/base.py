"""
Base Extractor - Abstract base class for diagnostic extractors.

An extractor turns a window of raw build output into candidate entries
for one compiler output format. Extractors are selected by name through
the ``ExtractorRegistry``.
"""

from abc import ABC, abstractmethod

from buildwatch.core.exceptions.errors import ExtractorNotFoundError
from buildwatch.parsing.models import RawEntry


class DiagnosticExtractor(ABC):
    """
    Abstract base class for diagnostic extractors.

    Implementations must be pure: the same window and correction always
    yield the same entries, and no state is kept between calls.
    """

    # Extractor metadata (override in subclasses)
    name: str = "base"
    description: str = "Base diagnostic extractor"

    # Should be about the largest expected byte span of one entry
    default_chunk_overlap: int = 0
    # Smaller overlaps are raised to this by the engine
    min_chunk_overlap: int = 0

    @abstractmethod
    def extract(self, window: bytes, position_correction: int) -> list[RawEntry]:
        """
        Find diagnostic entries in a window of build output.

        Args:
            window: Bytes to scan. When ``position_correction`` is non-zero
                the window starts at an arbitrary byte of the output.
            position_correction: Absolute offset of ``window[0]`` in the
                accumulated output.

        Returns:
            Entries in window order, with absolute offsets.
        """
        pass


class ExtractorRegistry:
    """
    Registry for managing diagnostic extractors.
    """

    def __init__(self):
        self._extractors: dict[str, DiagnosticExtractor] = {}

    def register(self, extractor: DiagnosticExtractor, *aliases: str) -> None:
        """Register an extractor under its name and any aliases."""
        for name in (extractor.name, *aliases):
            self._extractors[name] = extractor

    def get(self, name: str) -> DiagnosticExtractor:
        """
        Get an extractor by name.

        Raises:
            ExtractorNotFoundError: If nothing is registered under the name.
        """
        try:
            return self._extractors[name]
        except KeyError:
            raise ExtractorNotFoundError(name, available=self.list_extractors()) from None

    def __contains__(self, name: str) -> bool:
        return name in self._extractors

    def list_extractors(self) -> list[str]:
        """List all registered extractor names."""
        return sorted(self._extractors)
