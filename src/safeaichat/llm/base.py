from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from ..safety import SafetySettings
from .models import GenerateResult


class OnDeviceModel(ABC):
    """Abstract base class for on-device models.

    This module hides the design decision of how responses are produced.
    Implementations must handle:
    - Availability checks and model initialization
    - Running the safety filter before inference
    - Streaming partial output as GenerateResult events
    - Reporting failures as Error events instead of raising

    Supports async context manager protocol for proper resource cleanup:
        async with model:
            async for event in model.generate(prompt, settings):
                ...
    """

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send a debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable model name."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Check whether the model can run on this device."""

    @abstractmethod
    async def initialize(self) -> bool:
        """Prepare the model for generation.

        Returns:
            True on success, False otherwise. No further detail is reported.
        """

    @abstractmethod
    def generate(self, prompt: str, settings: SafetySettings) -> AsyncIterator[GenerateResult]:
        """Generate a streaming response.

        Args:
            prompt: User input
            settings: Safety configuration for this call

        Returns:
            Async iterator of events. Finite and not restartable; the last
            event is always Complete, Filtered or Error.
        """

    @abstractmethod
    async def clear_data(self) -> None:
        """Drop any cached conversation data."""

    async def close(self) -> None:
        """Close any open resources."""

    async def __aenter__(self) -> "OnDeviceModel":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
