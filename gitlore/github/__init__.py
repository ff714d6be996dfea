"""
GitHub integration for GitLore.

Fetches raw file content for the repository narrator.
"""

from .client import GitHubClient

__all__ = [
    "GitHubClient",
]
