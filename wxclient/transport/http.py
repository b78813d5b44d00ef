import logging
import httpx
from typing import Any, AsyncIterator, Dict, Iterator, Optional
from .base import Transport
from ..exceptions import (
    AuthenticationError,
    EmptyResponseError,
    InvalidRequestError,
    NetworkError,
    ProviderError,
    RateLimitError,
    TransportError,
)

logger = logging.getLogger("wxclient.transport")


class HTTPTransport(Transport):
    """
    HTTP transport using httpx.
    Pre-configured `client` / `aclient` instances may be injected (proxies, TLS, mocks).
    """
    def __init__(self,
                 base_url: str = "",
                 timeout: Optional[float] = 60.0,
                 client: Optional[httpx.Client] = None,
                 aclient: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.client = client or httpx.Client(base_url=base_url, timeout=httpx.Timeout(timeout))
        self.aclient = aclient or httpx.AsyncClient(base_url=base_url, timeout=httpx.Timeout(timeout))

    def close(self):
        self.client.close()

    async def aclose(self):
        await self.aclient.aclose()

    def _map_status(self, response: httpx.Response, context: str) -> TransportError:
        """Map a non-success response to a TransportError. The body must already be read."""
        status = response.status_code
        try:
            error_body = response.text
        except httpx.ResponseNotRead:
            error_body = "<Could not read error body>"

        error_msg = f"{context}: {error_body}"
        logger.error(f"HTTP Error {status}: {error_msg}")

        if status == 401 or status == 403:
            return AuthenticationError(error_msg, status_code=status)
        elif status == 429:
            return RateLimitError(error_msg, status_code=status)
        elif status == 400:
            return InvalidRequestError(error_msg, status_code=status)
        elif status >= 500:
            return ProviderError(error_msg, status_code=status)
        return TransportError(f"HTTP {status}: {error_msg}", status_code=status)

    def _network_error(self, e: httpx.RequestError, context: str) -> NetworkError:
        logger.error(f"Network Error: {e}")
        return NetworkError(f"{context}: network error: {e}")

    def _check_body(self, response: httpx.Response, context: str):
        if response.status_code == 204:
            raise EmptyResponseError(
                f"{context}: no response received, check your connection",
                status_code=response.status_code,
            )

    def send_form(self, url: str, params: Dict[str, str], headers: Dict[str, str]) -> Dict[str, Any]:
        logger.debug(f"SEND FORM {url}")
        try:
            response = self.client.post(url, params=params, headers=headers)
        except httpx.RequestError as e:
            raise self._network_error(e, "Form request failed") from e
        if response.is_error:
            raise self._map_status(response, "Form request failed")
        return response.json()

    async def send_form_async(self, url: str, params: Dict[str, str], headers: Dict[str, str]) -> Dict[str, Any]:
        logger.debug(f"ASYNC SEND FORM {url}")
        try:
            response = await self.aclient.post(url, params=params, headers=headers)
        except httpx.RequestError as e:
            raise self._network_error(e, "Async form request failed") from e
        if response.is_error:
            raise self._map_status(response, "Async form request failed")
        return response.json()

    def stream(self, endpoint: str, data: Dict[str, Any], headers: Dict[str, str]) -> Iterator[str]:
        logger.debug(f"STREAM {endpoint} payload={data}")
        try:
            with self.client.stream("POST", endpoint, json=data, headers=headers) as response:
                if response.is_error:
                    response.read()
                    raise self._map_status(response, "Stream failed")
                self._check_body(response, "Stream failed")
                for chunk in response.iter_text():
                    if chunk:
                        yield chunk
        except httpx.RequestError as e:
            raise self._network_error(e, "Stream failed") from e

    async def stream_async(self, endpoint: str, data: Dict[str, Any], headers: Dict[str, str]) -> AsyncIterator[str]:
        logger.debug(f"ASYNC STREAM {endpoint} payload={data}")
        try:
            async with self.aclient.stream("POST", endpoint, json=data, headers=headers) as response:
                if response.is_error:
                    await response.aread()
                    raise self._map_status(response, "Async stream failed")
                self._check_body(response, "Async stream failed")
                async for chunk in response.aiter_text():
                    if chunk:
                        yield chunk
        except httpx.RequestError as e:
            raise self._network_error(e, "Async stream failed") from e
