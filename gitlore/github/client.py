"""
GitHub REST API client wrapper.
"""

import logging
from typing import Optional

from github import Auth, Github
from github.GithubException import GithubException

from gitlore.errors import FileFetchError


class GitHubClient:
    """Wrapper around the GitHub REST API using PyGithub."""

    def __init__(self, access_token: Optional[str] = None):
        """
        Initialize the GitHub client.

        Args:
            access_token: Optional personal access token. Without one only
                public repositories are reachable, at the anonymous rate limit.
        """
        if access_token:
            self._github = Github(auth=Auth.Token(access_token))
        else:
            self._github = Github()

    def fetch_raw_file(self, owner: str, repo: str, path: str, ref: Optional[str] = None) -> str:
        """
        Get the decoded text of a single file.

        Args:
            owner: Repository owner.
            repo: Repository name.
            path: File path within the repository.
            ref: Git ref (branch, tag, or commit SHA). Default branch if omitted.

        Returns:
            The file content as UTF-8 text.

        Raises:
            FileFetchError: The path is a directory, is not UTF-8 text, or the
                API call failed.
        """
        try:
            repository = self._github.get_repo(f"{owner}/{repo}")
            if ref:
                content = repository.get_contents(path, ref=ref)
            else:
                content = repository.get_contents(path)
        except GithubException as e:
            logging.error(f"Failed to get file content for {owner}/{repo}/{path}: {e}")
            raise FileFetchError(f"Could not fetch {owner}/{repo}/{path}") from e

        if isinstance(content, list):
            raise FileFetchError(f"{owner}/{repo}/{path} is a directory")

        try:
            return content.decoded_content.decode("utf-8")
        except UnicodeDecodeError as e:
            logging.error(f"File {owner}/{repo}/{path} is not UTF-8 text")
            raise FileFetchError(f"{owner}/{repo}/{path} is not a text file") from e

    def close(self):
        """Close the GitHub client connection."""
        self._github.close()
