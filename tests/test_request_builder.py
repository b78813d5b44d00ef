"""
Tests for request shaping in WatsonXProvider.
"""
import pytest

from wxclient.config import WatsonXConfig
from wxclient.providers.watsonx import GRANITE_STOP_TOKEN, WatsonXProvider
from wxclient.types import (
    NEVER_EXPIRES,
    AssistantMessage,
    BearerCredential,
    CompletionOptions,
    Image,
    SystemMessage,
    Text,
    UserMessage,
)

ZEN = BearerCredential(token="zen-key", expires_at=NEVER_EXPIRES)
IAM = BearerCredential(token="iam-token", expires_at=4102444800)


def make_provider(**kwargs):
    config = WatsonXConfig(
        base_url="https://us-south.ml.cloud.ibm.com/",
        api_key="k",
        project_id="proj-1",
        api_version="2024-03-14",
        **kwargs,
    )
    return WatsonXProvider(config)


def test_endpoint_includes_api_version():
    provider = make_provider()
    assert provider.endpoint == "https://us-south.ml.cloud.ibm.com/ml/v1/text/generation_stream?version=2024-03-14"


def test_zen_api_key_header():
    headers = make_provider().headers(ZEN)
    assert headers["Authorization"] == "ZenApiKey zen-key"
    assert headers["Content-Type"] == "application/json"


def test_bearer_header():
    headers = make_provider().headers(IAM)
    assert headers["Authorization"] == "Bearer iam-token"


def test_payload_uses_last_message_only():
    provider = make_provider()
    messages = [
        SystemMessage(content="Be brief."),
        UserMessage(content="hello"),
        AssistantMessage(content="hi"),
        UserMessage(content="What is 2+2?"),
    ]

    endpoint, headers, data = provider.prepare_request(
        messages, CompletionOptions(model="meta-llama/llama-3-70b-instruct"), IAM
    )

    assert endpoint == provider.endpoint
    assert headers["Authorization"] == "Bearer iam-token"
    assert data == {
        "input": "What is 2+2?",
        "parameters": {
            "decoding_method": "greedy",
            "max_new_tokens": 1024,
            "min_new_tokens": 1,
            "stop_sequences": [],
            "include_stop_sequence": False,
            "repetition_penalty": 1,
        },
        "model_id": "meta-llama/llama-3-70b-instruct",
        "project_id": "proj-1",
    }


def test_max_tokens_option():
    _, _, data = make_provider().prepare_request(
        [UserMessage(content="x")], CompletionOptions(model="m", max_tokens=64), ZEN
    )
    assert data["parameters"]["max_new_tokens"] == 64


def test_granite_models_default_stop_token():
    _, _, data = make_provider().prepare_request(
        [UserMessage(content="x")], CompletionOptions(model="ibm/granite-13b-chat-v2"), ZEN
    )
    assert data["parameters"]["stop_sequences"] == [GRANITE_STOP_TOKEN]
    assert GRANITE_STOP_TOKEN == "<|im_end|>"


def test_other_models_have_no_stop_token():
    provider = make_provider()
    assert provider.resolve_stop_token(CompletionOptions(model="mistralai/mixtral-8x7b-instruct-v01")) is None


def test_configured_stop_token_wins_over_default():
    provider = make_provider(stop_token="</s>")
    assert provider.resolve_stop_token(CompletionOptions(model="ibm/granite-13b-chat-v2")) == "</s>"


def test_option_stop_token_wins_over_config():
    provider = make_provider(stop_token="</s>")
    options = CompletionOptions(model="ibm/granite-13b-chat-v2", stop_token="<|end|>")
    assert provider.resolve_stop_token(options) == "<|end|>"


def test_empty_messages_raise():
    with pytest.raises(ValueError):
        make_provider().prepare_request([], CompletionOptions(model="m"), ZEN)


def test_convert_message_text_passthrough():
    msg = UserMessage(content="plain text")
    assert make_provider().convert_message(msg) == {"role": "user", "content": "plain text"}


def test_convert_message_parts():
    msg = UserMessage(content=["caption", Text(text="Look"), Image(url="https://example.com/cat.png")])

    converted = make_provider().convert_message(msg)

    assert converted["role"] == "user"
    assert converted["content"] == [
        {"type": "text", "text": "caption"},
        {"type": "text", "text": "Look"},
        {"type": "image_url", "image_url": {"url": "https://example.com/cat.png", "detail": "low"}},
    ]


def test_convert_message_base64_image():
    msg = UserMessage(content=[Image(base64_data="abc", media_type="image/png")])

    part = make_provider().convert_message(msg)["content"][0]

    assert part["type"] == "image_url"
    assert part["image_url"] == {"url": "data:image/png;base64,abc", "detail": "low"}


def test_multipart_last_message_is_sent_normalized():
    msg = UserMessage(content=[Text(text="Describe"), Image(url="https://example.com/a.png")])

    _, _, data = make_provider().prepare_request([msg], CompletionOptions(model="m"), ZEN)

    assert data["input"][0] == {"type": "text", "text": "Describe"}
    assert data["input"][1]["image_url"]["detail"] == "low"


def test_convert_args_omits_unset_options():
    options = CompletionOptions(model="m", temperature=0.2, top_p=0.9)
    args = make_provider().convert_args(options, [UserMessage(content="hi")])

    assert args == {
        "messages": [{"role": "user", "content": "hi"}],
        "model": "m",
        "temperature": 0.2,
        "top_p": 0.9,
    }


def test_zero_max_tokens_is_sent_as_is():
    _, _, data = make_provider().prepare_request(
        [UserMessage(content="x")], CompletionOptions(model="m", max_tokens=0), ZEN
    )
    assert data["parameters"]["max_new_tokens"] == 0
