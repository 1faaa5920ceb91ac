import asyncio
import os

from dotenv import load_dotenv

from ollama_async import ChatRequest, Config, Message, OllamaClient

# Requires ollama_async and python-dotenv installed, and a running Ollama server.
load_dotenv(".env")

MODEL = os.environ.get("OLLAMA_MODEL", "llama3.2")


async def main() -> None:
    async with OllamaClient(Config.from_env()) as client:
        request = ChatRequest(
            model=MODEL,
            messages=[Message(role="user", content="Why is the sky blue?")],
        )
        async with client.chat_stream(request) as stream:
            async for part in stream:
                print(part.message.content, end="", flush=True)
        print()


if __name__ == "__main__":
    asyncio.run(main())
