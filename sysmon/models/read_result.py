"""Reader result type shared by every system source."""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """
    Outcome of reading one system source.

    Either carries a value or records why the source was unavailable.
    Readers never raise; the caller applies the fallback through or_else().
    """
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def of(cls, value: T) -> 'ReadResult[T]':
        return cls(value=value)

    @classmethod
    def unavailable(cls, reason: str) -> 'ReadResult[T]':
        return cls(reason=reason)

    @property
    def available(self) -> bool:
        return self.reason is None

    def or_else(self, fallback: Callable[[], T]) -> T:
        """
        Return the value, or the result of fallback() when unavailable.

        Args:
            fallback: Zero-argument callable producing the substitute value

        Returns:
            The read value or the fallback value
        """
        if self.available:
            return self.value
        logger.debug(f"Source unavailable ({self.reason}), using fallback")
        return fallback()
