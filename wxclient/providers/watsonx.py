from typing import Any, Dict, List, Optional, Tuple, Union
from .base import Provider
from ..config import WatsonXConfig
from ..types import BaseMessage, BearerCredential, CompletionOptions, Image, Text
from ..utils import image_url

DEFAULT_MAX_NEW_TOKENS = 1024
# Granite chat models end their turn with this marker
GRANITE_MARKER = "granite"
GRANITE_STOP_TOKEN = "<|im_end|>"


class WatsonXProvider(Provider):
    def __init__(self, config: WatsonXConfig):
        self.config = config

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/ml/v1/text/generation_stream?version={self.config.api_version}"

    def headers(self, credential: BearerCredential) -> Dict[str, str]:
        return {
            "Authorization": f"{credential.scheme} {credential.token}",
            "Content-Type": "application/json",
        }

    def resolve_stop_token(self, options: CompletionOptions) -> Optional[str]:
        if options.stop_token:
            return options.stop_token
        if self.config.stop_token:
            return self.config.stop_token
        if options.model and GRANITE_MARKER in options.model:
            return GRANITE_STOP_TOKEN
        return None

    def _convert_part(self, part: Union[str, Text, Image]) -> Dict[str, Any]:
        if isinstance(part, str):
            return {"type": "text", "text": part}
        if isinstance(part, Text):
            return {"type": "text", "text": part.text}
        return {
            "type": "image_url",
            "image_url": {"url": image_url(part), "detail": "low"},
        }

    def convert_message(self, message: BaseMessage) -> Dict[str, Any]:
        """Normalize a message to the wire shape. Text content passes through unchanged."""
        if isinstance(message.content, str):
            return {"role": message.role, "content": message.content}
        return {
            "role": message.role,
            "content": [self._convert_part(part) for part in message.content],
        }

    def convert_args(self, options: CompletionOptions, messages: List[BaseMessage]) -> Dict[str, Any]:
        """Chat-style arguments for `messages`. Unset options are omitted."""
        args = {
            "messages": [self.convert_message(m) for m in messages],
            "model": options.model,
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "top_p": options.top_p,
            "frequency_penalty": options.frequency_penalty,
            "presence_penalty": options.presence_penalty,
        }
        return {k: v for k, v in args.items() if v is not None}

    def prepare_request(self, messages: List[BaseMessage], options: CompletionOptions, credential: BearerCredential) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        if not messages:
            raise ValueError("At least one message is required")

        # Only the last turn is sent; the endpoint takes a single prompt
        last = self.convert_message(messages[-1])
        stop_token = self.resolve_stop_token(options)

        data = {
            "input": last["content"],
            "parameters": {
                "decoding_method": "greedy",
                "max_new_tokens": options.max_tokens if options.max_tokens is not None else DEFAULT_MAX_NEW_TOKENS,
                "min_new_tokens": 1,
                "stop_sequences": [stop_token] if stop_token else [],
                "include_stop_sequence": False,
                "repetition_penalty": 1,
            },
            "model_id": options.model,
            "project_id": self.config.project_id,
        }
        return self.endpoint, self.headers(credential), data
