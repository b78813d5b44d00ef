import time
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field

# Sentinel expiry for credentials that never expire (ZenApiKey auth)
NEVER_EXPIRES = -1


class Text(BaseModel):
    text: str


class Image(BaseModel):
    path: Optional[str] = None
    url: Optional[str] = None
    media_type: str = "image/jpeg"
    base64_data: Optional[str] = None


class BaseMessage(BaseModel):
    role: str
    content: Union[str, List[Union[str, Text, Image]]]


class SystemMessage(BaseMessage):
    role: Literal["system"] = "system"


class UserMessage(BaseMessage):
    role: Literal["user"] = "user"


class AssistantMessage(BaseMessage):
    role: Literal["assistant"] = "assistant"


class CompletionOptions(BaseModel):
    """Generation options for a single request. Unset fields fall back to defaults."""
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop_token: Optional[str] = None


class BearerCredential(BaseModel):
    """
    An access token plus its expiry as a UNIX timestamp.
    `expires_at == NEVER_EXPIRES` marks a raw API key used with the ZenApiKey scheme.
    """
    token: Optional[str] = None
    expires_at: float = 0

    @property
    def never_expires(self) -> bool:
        return self.expires_at == NEVER_EXPIRES

    @property
    def scheme(self) -> str:
        return "ZenApiKey" if self.never_expires else "Bearer"

    def is_expired(self, now: Optional[float] = None, margin: float = 0) -> bool:
        if self.never_expires:
            return False
        now = time.time() if now is None else now
        return now > self.expires_at - margin


class StreamFrame(BaseModel):
    """The id and data payloads decoded from one transport chunk."""
    event_id: Optional[int] = None
    payloads: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def text(self) -> str:
        parts = []
        for payload in self.payloads:
            for result in payload.get("results") or []:
                parts.append(result.get("generated_text") or "")
        return "".join(parts)


class MessageDelta(BaseModel):
    """Incremental assistant text, one per transport chunk."""
    role: Literal["assistant"] = "assistant"
    content: str = ""


class DecodeWarning(BaseModel):
    """A malformed stream line that was skipped."""
    kind: Literal["id", "data"]
    line: str
    error: str
