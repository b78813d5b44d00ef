from .client import Client
from .config import WatsonXConfig
from .auth import CredentialCache, TokenManager
from .providers.watsonx import WatsonXProvider
from .models.chat import ChatModel, StreamState
from .streaming import StreamDecoder, DecodeObserver, LoggingDecodeObserver
from .transport.http import HTTPTransport
from .types import (
    UserMessage, SystemMessage, AssistantMessage,
    Text, Image, CompletionOptions, BearerCredential,
    StreamFrame, MessageDelta, DecodeWarning, NEVER_EXPIRES
)
from .testing import MockTransport
from .exceptions import (
    WatsonXError, SetupError, TransportError, AuthenticationError,
    RateLimitError, ProviderError, InvalidRequestError, NetworkError,
    EmptyResponseError
)

__version__ = "0.1.0"

__all__ = [
    "Client",
    "WatsonXConfig",
    "CredentialCache",
    "TokenManager",
    "WatsonXProvider",
    "ChatModel",
    "StreamState",
    "StreamDecoder",
    "DecodeObserver",
    "LoggingDecodeObserver",
    "HTTPTransport",
    "UserMessage",
    "SystemMessage",
    "AssistantMessage",
    "Text",
    "Image",
    "CompletionOptions",
    "BearerCredential",
    "StreamFrame",
    "MessageDelta",
    "DecodeWarning",
    "NEVER_EXPIRES",
    "MockTransport",
    "WatsonXError",
    "SetupError",
    "TransportError",
    "AuthenticationError",
    "RateLimitError",
    "ProviderError",
    "InvalidRequestError",
    "NetworkError",
    "EmptyResponseError",
]
