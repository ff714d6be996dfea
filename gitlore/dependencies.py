from functools import lru_cache

from gitlore.config import Settings
from gitlore.github import GitHubClient
from gitlore.llm import build_model_client


@lru_cache
def get_settings() -> Settings:
    return Settings()


async def get_model_client():
    client = build_model_client(get_settings())
    try:
        yield client
    finally:
        await client.aclose()


def get_github_client():
    client = GitHubClient(get_settings().GITHUB_TOKEN)
    try:
        yield client
    finally:
        client.close()
