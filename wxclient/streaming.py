"""
Decoder for the watsonx text generation stream.

The service sends newline-delimited `id:` and `data:` lines. Each transport
chunk is decoded on its own and produces exactly one MessageDelta, which may
be empty. A `data:` line split across two chunks is not reassembled: the
first half is reported as a warning and the second half is ignored.
"""
import json
import logging
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, List, Optional, Protocol

from .types import DecodeWarning, MessageDelta, StreamFrame

logger = logging.getLogger("wxclient.stream")


def _check_payload(payload):
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        raise ValueError("payload has no results list")
    for result in results:
        if not isinstance(result, dict) or not isinstance(result.get("generated_text") or "", str):
            raise ValueError(f"malformed result: {result!r}")


class DecodeObserver(Protocol):
    def on_decode_warning(self, warning: DecodeWarning) -> None:
        """Called for every malformed line. Decoding continues afterwards."""
        ...


class LoggingDecodeObserver:
    """Logs decode warnings to the `wxclient.stream` logger."""
    def __init__(self, logger: logging.Logger = logger, log_level: int = logging.WARNING):
        self.logger = logger
        self.log_level = log_level

    def on_decode_warning(self, warning: DecodeWarning) -> None:
        if warning.kind == "id":
            self.logger.log(self.log_level, f"Unable to parse stream chunk ID: {warning.line}")
        else:
            self.logger.log(self.log_level, f"Error parsing JSON string: {warning.line} ({warning.error})")


class StreamDecoder:
    def __init__(self, observers: Optional[List[DecodeObserver]] = None):
        # None -> log warnings; [] -> drop them
        self.observers = [LoggingDecodeObserver()] if observers is None else observers

    def _warn(self, kind: str, line: str, error: Exception):
        warning = DecodeWarning(kind=kind, line=line, error=str(error))
        for observer in self.observers:
            observer.on_decode_warning(warning)

    def parse_chunk(self, chunk: str) -> StreamFrame:
        frame = StreamFrame()
        # Split on "\n" only; U+2028 and friends may appear inside JSON strings
        for line in chunk.split("\n"):
            line = line.rstrip("\r")
            if line.startswith("id:"):
                try:
                    frame.event_id = int(line[3:].strip())
                except ValueError as e:
                    self._warn("id", line, e)
            elif line.startswith("data:"):
                data_str = line[5:].strip()
                try:
                    payload = json.loads(data_str)
                    _check_payload(payload)
                except ValueError as e:
                    self._warn("data", data_str, e)
                    continue
                frame.payloads.append(payload)
        return frame

    def to_delta(self, chunk: str) -> MessageDelta:
        return MessageDelta(content=self.parse_chunk(chunk).text)

    def decode(self, chunks: Iterable[str]) -> Iterator[MessageDelta]:
        for chunk in chunks:
            yield self.to_delta(chunk)

    async def decode_async(self, chunks: AsyncIterable[str]) -> AsyncIterator[MessageDelta]:
        async for chunk in chunks:
            yield self.to_delta(chunk)
