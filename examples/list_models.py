import asyncio

from dotenv import load_dotenv

from ollama_async import Config, OllamaClient, ShowRequest

load_dotenv(".env")


async def main() -> None:
    async with OllamaClient(Config.from_env()) as client:
        tags = await client.list()
        for info in tags.models:
            shown = await client.show(ShowRequest(model=info.name))
            family = shown.details.family or "unknown"
            print(f"{info.name}: {info.details.parameter_size or '?'} ({family})")


if __name__ == "__main__":
    asyncio.run(main())
