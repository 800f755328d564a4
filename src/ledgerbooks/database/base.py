"""Abstract snapshot store interface."""

from abc import ABC, abstractmethod

# Import directly to avoid circular import through domain/__init__.py
from ledgerbooks.domain.ledger import Ledger


class BookRepository(ABC):
    """Abstract store for ledger snapshots."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create storage structures that do not exist yet."""
        pass

    @abstractmethod
    def load(self) -> Ledger:
        """Load the stored ledger.

        Returns an empty ledger when nothing has been stored yet.

        Raises:
            UnsupportedVersionError: If the snapshot version cannot be read
            SnapshotError: If the snapshot cannot be read at all
        """
        pass

    @abstractmethod
    def save(self, ledger: Ledger) -> None:
        """Replace the stored snapshot with ``ledger``."""
        pass
