from abc import ABC, abstractmethod

class ABCByteStream(ABC):
    """
    Interface for a blocking byte stream (file, memory, socket...).
    Responsibility: Move bytes; knows nothing about samples.
    """

    @abstractmethod
    def read(self, buffer, max_bytes: int) -> int:
        """Read up to max_bytes into buffer, return the count actually read."""
        pass

    @abstractmethod
    def write(self, data) -> None:
        """Write every byte of data."""
        pass

    @abstractmethod
    def seek(self, offset: int) -> None:
        """Move to an absolute byte offset from the beginning."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Total length of the stream in bytes."""
        pass

    @abstractmethod
    def position(self) -> int:
        """Current byte offset from the beginning."""
        pass
