"""
Testing utilities for wxclient applications.
Use these tools to verify your code without making real API calls.
"""
from typing import Any, AsyncIterator, Dict, Iterator, List, Optional, Union
from .transport.base import Transport

DEFAULT_TOKEN_RESPONSE = {"access_token": "mock-token", "expiration": 4102444800}


class MockTransport(Transport):
    """
    A transport that replays canned stream chunks and token responses.
    Every call is recorded in `requests` / `form_requests`.
    """
    def __init__(self, base_url: str = "mock://test", timeout: Optional[float] = None):
        self.base_url = base_url
        self.timeout = timeout
        self._streams: List[Union[List[str], Exception]] = []
        self._token_responses: List[Union[Dict[str, Any], Exception]] = []
        self.requests: List[Dict[str, Any]] = []
        self.form_requests: List[Dict[str, Any]] = []
        self.closed = False
        self.streams_closed = 0

    def add_stream(self, chunks: List[str]):
        """Queue the chunks for the next stream request."""
        self._streams.append(list(chunks))

    def add_stream_error(self, error: Exception):
        """Queue an error to be raised when the next stream opens."""
        self._streams.append(error)

    def add_token_response(self, response: Union[Dict[str, Any], Exception]):
        """Queue an IAM response (or an error) for the next token request."""
        self._token_responses.append(response)

    def _next_token_response(self) -> Dict[str, Any]:
        if not self._token_responses:
            return dict(DEFAULT_TOKEN_RESPONSE)
        item = self._token_responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def _next_stream(self) -> List[str]:
        item = self._streams.pop(0) if self._streams else []
        if isinstance(item, Exception):
            raise item
        return item

    def send_form(self, url: str, params: Dict[str, str], headers: Dict[str, str]) -> Dict[str, Any]:
        self.form_requests.append({"url": url, "params": params, "headers": headers})
        return self._next_token_response()

    async def send_form_async(self, url: str, params: Dict[str, str], headers: Dict[str, str]) -> Dict[str, Any]:
        return self.send_form(url, params, headers)

    def stream(self, endpoint: str, data: Dict[str, Any], headers: Dict[str, str]) -> Iterator[str]:
        self.requests.append({"endpoint": endpoint, "data": data, "headers": headers})
        try:
            for chunk in self._next_stream():
                yield chunk
        finally:
            self.streams_closed += 1

    async def stream_async(self, endpoint: str, data: Dict[str, Any], headers: Dict[str, str]) -> AsyncIterator[str]:
        self.requests.append({"endpoint": endpoint, "data": data, "headers": headers})
        try:
            for chunk in self._next_stream():
                yield chunk
        finally:
            self.streams_closed += 1

    def close(self):
        self.closed = True

    async def aclose(self):
        self.closed = True
