import pytest
from unittest import mock
from github.GithubException import GithubException
from gitlore.errors import FileFetchError
from gitlore.github import GitHubClient

@pytest.fixture
def mock_github():
    with mock.patch("gitlore.github.client.Github") as github:
        yield github

def test_fetch_raw_file(mock_github):
    repository = mock_github.return_value.get_repo.return_value
    repository.get_contents.return_value = mock.Mock(decoded_content=b"print('hello')\n")

    content = GitHubClient().fetch_raw_file("octocat", "hello-world", "main.py")

    assert content == "print('hello')\n"
    mock_github.return_value.get_repo.assert_called_with("octocat/hello-world")
    repository.get_contents.assert_called_with("main.py")

def test_fetch_raw_file_at_ref(mock_github):
    repository = mock_github.return_value.get_repo.return_value
    repository.get_contents.return_value = mock.Mock(decoded_content=b"x = 1")

    GitHubClient().fetch_raw_file("octocat", "hello-world", "main.py", ref="dev")

    repository.get_contents.assert_called_with("main.py", ref="dev")

def test_token_is_used(mock_github):
    with mock.patch("gitlore.github.client.Auth.Token") as token:
        GitHubClient("ghp_test")

    token.assert_called_with("ghp_test")
    mock_github.assert_called_with(auth=token.return_value)

def test_directory_is_rejected(mock_github):
    repository = mock_github.return_value.get_repo.return_value
    repository.get_contents.return_value = [mock.Mock(), mock.Mock()]

    with pytest.raises(FileFetchError):
        GitHubClient().fetch_raw_file("octocat", "hello-world", "src")

def test_binary_file_is_rejected(mock_github):
    repository = mock_github.return_value.get_repo.return_value
    repository.get_contents.return_value = mock.Mock(decoded_content=b"\xff\xfe\x00")

    with pytest.raises(FileFetchError):
        GitHubClient().fetch_raw_file("octocat", "hello-world", "logo.png")

def test_api_error(mock_github):
    mock_github.return_value.get_repo.side_effect = GithubException(404, {"message": "Not Found"})

    with pytest.raises(FileFetchError):
        GitHubClient().fetch_raw_file("octocat", "missing", "main.py")
