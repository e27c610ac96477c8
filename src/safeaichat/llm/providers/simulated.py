"""Simulated Gemini Nano model.

Stands in for the on-device model: the safety filter runs on the prompt,
then a canned reply is streamed back word by word with artificial pacing.
"""

import asyncio
from collections.abc import AsyncIterator

from ...safety import DEFAULT_FILTER_REASON, SafetySettings, filter_content
from ..base import OnDeviceModel
from ..models import Chunk, Complete, Error, Filtered, GenerateResult, Processing
from ..responses import select_canned_response

UNAVAILABLE_MESSAGE = "Gemini Nano is not available on this device"


class SimulatedNanoModel(OnDeviceModel):
    """Demo model that replays canned responses.

    Hidden design decisions:
    - Canned reply selection (see responses.py)
    - Word-by-word chunking of the reply
    - Pacing delays between events
    """

    def __init__(
        self,
        processing_delay: float = 0.3,
        chunk_delay: float = 0.05,
        availability_delay: float = 0.1,
        init_delay: float = 0.5,
        clear_delay: float = 0.1,
        available: bool = True,
    ):
        """Initialize the simulated model.

        Args:
            processing_delay: Seconds to wait after Processing (simulated inference)
            chunk_delay: Seconds to wait after each Chunk
            availability_delay: Seconds taken by is_available()
            init_delay: Seconds taken by initialize()
            clear_delay: Seconds taken by clear_data()
            available: Pretend the device supports the model
        """
        super().__init__()
        self._processing_delay = processing_delay
        self._chunk_delay = chunk_delay
        self._availability_delay = availability_delay
        self._init_delay = init_delay
        self._clear_delay = clear_delay
        self._available = available

    @property
    def name(self) -> str:
        return "gemini-nano (simulated)"

    async def is_available(self) -> bool:
        await asyncio.sleep(self._availability_delay)
        return self._available

    async def initialize(self) -> bool:
        self._debug("info", "Model", "Initializing simulated Gemini Nano")
        await asyncio.sleep(self._init_delay)
        if not self._available:
            self._debug("error", "Model", UNAVAILABLE_MESSAGE)
            return False
        self._debug("info", "Model", "Model ready")
        return True

    async def generate(self, prompt: str, settings: SafetySettings) -> AsyncIterator[GenerateResult]:
        decision = filter_content(prompt, settings)
        if decision.blocked:
            reason = decision.reason or DEFAULT_FILTER_REASON
            self._debug("warning", "Safety", reason)
            yield Filtered(reason=reason)
            return

        yield Processing()
        await asyncio.sleep(self._processing_delay)

        if not self._available:
            self._debug("error", "Model", UNAVAILABLE_MESSAGE)
            yield Error(message=UNAVAILABLE_MESSAGE)
            return

        try:
            response = self._respond(prompt)
        except Exception as e:
            self._debug("error", "Model", f"Generation failed: {e}")
            yield Error(message=str(e))
            return

        words = response.split(" ")
        self._debug("debug", "Model", f"Streaming {len(words)} words")

        generated: list[str] = []
        for word in words:
            generated.append(word)
            yield Chunk(text=" ".join(generated))
            await asyncio.sleep(self._chunk_delay)

        yield Complete(text=response)

    def _respond(self, prompt: str) -> str:
        """Produce the full reply text for a prompt."""
        return select_canned_response(prompt)

    async def clear_data(self) -> None:
        # Nothing is cached; keep the pacing of a real cache purge
        await asyncio.sleep(self._clear_delay)
        self._debug("info", "Model", "Cached data cleared")
