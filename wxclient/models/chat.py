import logging
from enum import Enum
from typing import AsyncIterator, Iterator, List, Optional

from ..auth.manager import TokenManager
from ..providers.base import Provider
from ..streaming import StreamDecoder
from ..transport.base import Transport
from ..types import BaseMessage, CompletionOptions, MessageDelta, UserMessage
from ..utils import strip_images

logger = logging.getLogger("wxclient.chat")


class StreamState(str, Enum):
    IDLE = "idle"
    ACQUIRING_TOKEN = "acquiring_token"
    REQUESTING = "requesting"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ChatModel:
    """
    Streams chat completions from one model.

    Each call acquires a credential, sends a single request and yields one
    MessageDelta per received chunk. There are no retries; errors propagate
    to the caller. `state` reflects the most recent call; a caller that stops
    consuming early leaves it at CANCELLED.
    """
    def __init__(self,
                 model_name: str,
                 provider: Provider,
                 transport: Transport,
                 token_manager: TokenManager,
                 decoder: Optional[StreamDecoder] = None):
        self.model_name = model_name
        self.provider = provider
        self.transport = transport
        self.token_manager = token_manager
        self.decoder = decoder or StreamDecoder()
        self.state = StreamState.IDLE

    def _transition(self, state: StreamState):
        logger.debug(f"{self.model_name}: {self.state.value} -> {state.value}")
        self.state = state

    def _resolve_options(self, options: Optional[CompletionOptions]) -> CompletionOptions:
        options = options or CompletionOptions()
        if options.model:
            return options
        return options.model_copy(update={"model": self.model_name})

    def stream_chat(self, messages: List[BaseMessage], options: Optional[CompletionOptions] = None) -> Iterator[MessageDelta]:
        """Stream assistant deltas for `messages`."""
        options = self._resolve_options(options)
        chunks = None
        try:
            self._transition(StreamState.ACQUIRING_TOKEN)
            credential = self.token_manager.get_valid_credential()

            self._transition(StreamState.REQUESTING)
            endpoint, headers, data = self.provider.prepare_request(messages, options, credential)
            chunks = self.transport.stream(endpoint, data, headers)

            for delta in self.decoder.decode(chunks):
                if self.state is not StreamState.STREAMING:
                    self._transition(StreamState.STREAMING)
                yield delta
        except GeneratorExit:
            self._transition(StreamState.CANCELLED)
            raise
        except Exception:
            self._transition(StreamState.FAILED)
            raise
        finally:
            # Releases the connection when the caller stops early
            if chunks is not None:
                chunks.close()
        self._transition(StreamState.COMPLETED)

    async def stream_chat_async(self, messages: List[BaseMessage], options: Optional[CompletionOptions] = None) -> AsyncIterator[MessageDelta]:
        """Async version of stream_chat."""
        options = self._resolve_options(options)
        chunks = None
        try:
            self._transition(StreamState.ACQUIRING_TOKEN)
            credential = await self.token_manager.get_valid_credential_async()

            self._transition(StreamState.REQUESTING)
            endpoint, headers, data = self.provider.prepare_request(messages, options, credential)
            chunks = self.transport.stream_async(endpoint, data, headers)

            async for delta in self.decoder.decode_async(chunks):
                if self.state is not StreamState.STREAMING:
                    self._transition(StreamState.STREAMING)
                yield delta
        except GeneratorExit:
            self._transition(StreamState.CANCELLED)
            raise
        except Exception:
            self._transition(StreamState.FAILED)
            raise
        finally:
            if chunks is not None:
                await chunks.aclose()
        self._transition(StreamState.COMPLETED)

    def generate(self, prompt: str, options: Optional[CompletionOptions] = None) -> str:
        """Return the full completion for `prompt`."""
        completion = ""
        for delta in self.stream_chat([UserMessage(content=prompt)], options):
            completion += delta.content
        return completion

    async def generate_async(self, prompt: str, options: Optional[CompletionOptions] = None) -> str:
        """Async version of generate."""
        completion = ""
        async for delta in self.stream_chat_async([UserMessage(content=prompt)], options):
            completion += delta.content
        return completion

    def stream(self, prompt: str, options: Optional[CompletionOptions] = None) -> Iterator[str]:
        """Yield the completion for `prompt` piece by piece."""
        deltas = self.stream_chat([UserMessage(content=prompt)], options)
        try:
            for delta in deltas:
                yield strip_images(delta.content)
        finally:
            deltas.close()

    async def stream_async(self, prompt: str, options: Optional[CompletionOptions] = None) -> AsyncIterator[str]:
        """Async version of stream."""
        deltas = self.stream_chat_async([UserMessage(content=prompt)], options)
        try:
            async for delta in deltas:
                yield strip_images(delta.content)
        finally:
            await deltas.aclose()
