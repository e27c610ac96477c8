from .base import OnDeviceModel
from .factory import create_model
from .models import Chunk, Complete, Error, Filtered, GenerateResult, Processing
from .providers import SimulatedNanoModel
from .responses import CANNED_RESPONSES, DEFAULT_RESPONSE, select_canned_response

__all__ = [
    "CANNED_RESPONSES",
    "DEFAULT_RESPONSE",
    "Chunk",
    "Complete",
    "Error",
    "Filtered",
    "GenerateResult",
    "OnDeviceModel",
    "Processing",
    "SimulatedNanoModel",
    "create_model",
    "select_canned_response",
]
