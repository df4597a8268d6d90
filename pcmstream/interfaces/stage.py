from abc import ABC, abstractmethod

class ABCStage(ABC):
    """
    Interface for a pipeline stage.
    Responsibility: Produce PCM bytes on demand for the next stage downstream.
    """

    @abstractmethod
    def init(self) -> None:
        """Prepare the stage for streaming."""
        pass

    @abstractmethod
    def pull(self, max_bytes: int):
        """
        Return up to max_bytes of PCM data as a bytes-like object.
        A short result signals near exhaustion, an empty one exhaustion.
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Finish streaming and return to idle."""
        pass

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        pass

    @property
    @abstractmethod
    def bits_per_sample(self) -> int:
        pass

    @property
    @abstractmethod
    def channels(self) -> int:
        pass

    @property
    def can_output(self) -> bool:
        """Whether the stage is currently able to produce data."""
        return True
