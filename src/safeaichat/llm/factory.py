from typing import Any

from .base import OnDeviceModel
from .providers import SimulatedNanoModel


def create_model(backend: str = "simulated", **config: Any) -> OnDeviceModel:
    """Create an on-device model instance.

    This factory function hides the instantiation logic for different backends.

    Args:
        backend: Model backend ('simulated', alias 'gemini-nano')
        **config: Backend-specific configuration
            For simulated:
                - processing_delay: float (default: 0.3)
                - chunk_delay: float (default: 0.05)
                - availability_delay: float (default: 0.1)
                - init_delay: float (default: 0.5)
                - clear_delay: float (default: 0.1)
                - available: bool (default: True)

    Returns:
        Model instance, not yet initialized

    Raises:
        ValueError: If backend type is not supported

    Examples:
        >>> model = create_model("simulated", chunk_delay=0.0)
    """
    backend_lower = backend.lower()

    if backend_lower in ("simulated", "gemini-nano"):
        return SimulatedNanoModel(**config)

    raise ValueError(
        f"Unsupported model backend: {backend}. "
        f"Supported backends: 'simulated'"
    )
