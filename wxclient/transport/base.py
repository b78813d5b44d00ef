from typing import Any, AsyncIterator, Dict, Iterator, Protocol


class Transport(Protocol):
    """
    Abstract interface for network transport.
    """

    def send_form(self, url: str, params: Dict[str, str], headers: Dict[str, str]) -> Dict[str, Any]:
        """POST a form-encoded request and return the decoded JSON body."""
        ...

    async def send_form_async(self, url: str, params: Dict[str, str], headers: Dict[str, str]) -> Dict[str, Any]:
        """Async version of send_form."""
        ...

    def stream(self, endpoint: str, data: Dict[str, Any], headers: Dict[str, str]) -> Iterator[str]:
        """POST a JSON request and yield the response body as text chunks."""
        ...

    def stream_async(self, endpoint: str, data: Dict[str, Any], headers: Dict[str, str]) -> AsyncIterator[str]:
        """Async version of stream."""
        ...
