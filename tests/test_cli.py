import json
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from octoscan import cli
from octoscan.core.exceptions import GitHubAPIError


def comment(i):
    return {
        "id": i,
        "body": f"comment {i} " + "x" * 60,
        "created_at": "2024-05-0%dT10:00:00Z" % i,
        "user": {"login": f"user{i}"},
    }


PAGES = [
    ([comment(1), comment(2)], SimpleNamespace(next_page=2, after="")),
    ([comment(3)], SimpleNamespace(next_page=0, after="")),
]


@pytest.fixture
def mock_api():
    with patch.object(cli, "GitHubAPI") as api_cls:
        api = api_cls.return_value
        api.token = "test_token"
        api.list_issue_comments.side_effect = list(PAGES)
        yield api


@pytest.mark.parametrize(
    "value,expected",
    [
        ("google/go-github", ("google", "go-github")),
        ("https://github.com/google/go-github", ("google", "go-github")),
        ("https://github.com/google/go-github.git", ("google", "go-github")),
    ],
)
def test_parse_owner_repo(value, expected):
    assert cli.parse_owner_repo(value) == expected


@pytest.mark.parametrize("value", ["google", "a/b/c", "https://gitlab.com/a/b", "/repo"])
def test_parse_owner_repo_invalid(value):
    with pytest.raises(ValueError):
        cli.parse_owner_repo(value)


def test_format_comment_truncates_body():
    line = cli.format_comment(comment(1))

    assert line.startswith("2024-05-01T10:00:00Z user1: ")
    assert repr(comment(1)["body"][:50]) in line


def test_main_lists_all_pages(mock_api, capsys):
    assert cli.main(["google/go-github", "2618", "--per-page", "2"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 3
    assert out[2].startswith("2024-05-03T10:00:00Z user3")
    assert mock_api.list_issue_comments.call_count == 2
    owner, repo, number, opts, option = mock_api.list_issue_comments.call_args.args
    assert (owner, repo, number, opts.per_page, option.page) == ("google", "go-github", 2618, 2, 2)


def test_main_json_output(mock_api, capsys):
    assert cli.main(["google/go-github", "1", "-f", "json"]) == 0

    assert [c["id"] for c in json.loads(capsys.readouterr().out)] == [1, 2, 3]


def test_main_limit_stops_early(mock_api, capsys):
    assert cli.main(["google/go-github", "1", "--limit", "2"]) == 0

    assert len(capsys.readouterr().out.splitlines()) == 2
    assert mock_api.list_issue_comments.call_count == 1


def test_main_api_error(mock_api, capsys):
    mock_api.list_issue_comments.side_effect = [
        PAGES[0],
        GitHubAPIError(500, "Server Error"),
    ]

    assert cli.main(["google/go-github", "1"]) == 1
    assert len(capsys.readouterr().out.splitlines()) == 2


def test_main_invalid_repository(mock_api):
    assert cli.main(["not-a-repo", "1"]) == 1
    mock_api.list_issue_comments.assert_not_called()


@pytest.mark.parametrize("limit", ["-1", "abc"])
def test_main_rejects_invalid_limit(mock_api, limit, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["google/go-github", "1", "--limit", limit])

    assert excinfo.value.code == 2
    assert "--limit" in capsys.readouterr().err
    mock_api.list_issue_comments.assert_not_called()


def test_main_limit_zero(mock_api, capsys):
    assert cli.main(["google/go-github", "1", "--limit", "0"]) == 0

    assert capsys.readouterr().out == ""
    mock_api.list_issue_comments.assert_not_called()
