"""Base adapter interface for hapcheck."""

from abc import ABC, abstractmethod
from typing import Any


class InputAdapter(ABC):
    """Abstract base class for input format adapters.

    Adapters read one input file and hand back hapcheck samples.
    """

    @abstractmethod
    def can_handle(self, file_path: str) -> bool:
        """Check if this adapter can handle the given file.

        Args:
            file_path: Path to the input file

        Returns:
            True if this adapter can read the file
        """
        pass

    @abstractmethod
    def load(self, file_path: str) -> Any:
        """Load all samples from the input file.

        Args:
            file_path: Path to the input file

        Returns:
            Adapter-specific collection of samples
        """
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the format name (e.g., 'VCF', 'HSD').

        Returns:
            Human-readable format name
        """
        pass
