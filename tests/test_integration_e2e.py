"""
End-to-end tests against a real watsonx deployment.
These tests require WATSONX_URL, WATSONX_API_KEY and WATSONX_PROJECT_ID in .env.
Skip if they are not available.
"""
import os

import pytest
from dotenv import load_dotenv

from wxclient import Client

load_dotenv()

HAS_WATSONX = bool(os.getenv("WATSONX_URL") and os.getenv("WATSONX_API_KEY") and os.getenv("WATSONX_PROJECT_ID"))
MODEL = os.getenv("WATSONX_MODEL", "ibm/granite-13b-chat-v2")


@pytest.mark.skipif(not HAS_WATSONX, reason="WATSONX credentials not set")
def test_watsonx_generate():
    client = Client()
    text = client.chat(MODEL).generate("Say 'test passed' and nothing else.")

    assert text
    print(f"✅ watsonx test passed: {text}")


@pytest.mark.skipif(not HAS_WATSONX, reason="WATSONX credentials not set")
def test_watsonx_streaming():
    client = Client()
    pieces = list(client.chat(MODEL).stream("Count from 1 to 5."))

    assert pieces
    assert "".join(pieces)


@pytest.mark.skipif(not HAS_WATSONX, reason="WATSONX credentials not set")
@pytest.mark.asyncio
async def test_watsonx_generate_async():
    client = Client()
    text = await client.chat(MODEL).generate_async("Say 'hello'.")

    assert text
    await client.aclose()
