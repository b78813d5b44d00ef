from typing import Any, Dict, List, Optional, Protocol, Tuple
from ..types import BaseMessage, BearerCredential, CompletionOptions


class Provider(Protocol):
    """
    Protocol that defines how to talk to a text generation service.
    It handles standardizing the request payload and headers.
    """

    @property
    def base_url(self) -> str:
        """Return the base URL for this provider."""
        ...

    def headers(self, credential: BearerCredential) -> Dict[str, str]:
        """Return the headers for a request made with `credential`."""
        ...

    def prepare_request(self, messages: List[BaseMessage], options: CompletionOptions, credential: BearerCredential) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        """
        Prepare the endpoint, headers and JSON payload for a streaming request.
        Returns (endpoint, headers, json_payload).
        """
        ...

    def resolve_stop_token(self, options: CompletionOptions) -> Optional[str]:
        """Return the stop sequence to send, if any."""
        ...
