"""
Demo: Streaming watsonx Responses in Console
Run: python examples/demo_streaming.py
"""
import os
import asyncio
from dotenv import load_dotenv
from wxclient import Client

load_dotenv()

MODEL = os.getenv("WATSONX_MODEL", "ibm/granite-13b-chat-v2")


def main():
    if not os.getenv("WATSONX_URL") or not os.getenv("WATSONX_API_KEY"):
        print("Please set WATSONX_URL, WATSONX_API_KEY and WATSONX_PROJECT_ID in .env")
        return

    client = Client()
    print("🤖: I'm ready! (Sync Streaming)")

    print("User: Count to 10 quickly.")
    print("AI: ", end="", flush=True)

    for chunk in client.chat(MODEL).stream("Count to 10 quickly."):
        print(chunk, end="", flush=True)
    print("\n")


async def main_async():
    client = Client()
    print("🤖: Async mode activating! (Async Streaming)")

    print("User: Write a timber haiku.")
    print("AI: ", end="", flush=True)

    async for chunk in client.chat(MODEL).stream_async("Write a haiku about timber."):
        print(chunk, end="", flush=True)
    print("\n")
    await client.aclose()


if __name__ == "__main__":
    main()
    if os.getenv("WATSONX_URL"):
        asyncio.run(main_async())
