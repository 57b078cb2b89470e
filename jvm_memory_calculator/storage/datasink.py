from abc import ABC
from abc import abstractmethod
from typing import Any


class IDataSink(ABC):
    """
    Interface for data sinks that store sizing results.
    """

    @abstractmethod
    def save(self, data: Any) -> None:
        """Save the given data to the sink."""
        pass
