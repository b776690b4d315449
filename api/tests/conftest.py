import asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from repobrowser.config import Settings
from repobrowser.github import GitHubClient, build_http_client
from repobrowser.models import Repository

BASE_URL = "https://api.github.test"


def make_settings(**overrides: Any) -> Settings:
    values = dict(
        github_api_base_url=BASE_URL,
        github_timeout=5,
        github_user_agent="repo-browser-tests",
        log_level="DEBUG",
        cors_origins="*",
        host="127.0.0.1",
        port=8000,
    )
    values.update(overrides)
    return Settings(**values)


def repo_payload(repo_id: int, name: Optional[str] = None, owner: str = "octocat", **overrides: Any) -> Dict[str, Any]:
    name = name or f"repo-{repo_id}"
    payload = {
        "id": repo_id,
        "name": name,
        "full_name": f"{owner}/{name}",
        "description": f"Description of {name}",
        "stargazers_count": repo_id * 10,
        "forks_count": repo_id,
        "owner": {"login": owner, "id": 1},
        "html_url": f"https://github.com/{owner}/{name}",
    }
    payload.update(overrides)
    return payload


def make_repo(repo_id: int, name: Optional[str] = None, owner: str = "octocat", **overrides: Any) -> Repository:
    return Repository.model_validate(repo_payload(repo_id, name, owner, **overrides))


class FakeGitHubAPI:
    """Serves canned pages and README bodies through ``httpx.MockTransport``.

    ``pages[username][page]`` and ``readmes["owner/name"]`` hold either a JSON
    body, an ``httpx.Response``, or an exception to raise. A gate registered
    under the same key holds the response until the event is set.
    """

    def __init__(self) -> None:
        self.pages: Dict[str, Dict[int, Any]] = {}
        self.readmes: Dict[str, Any] = {}
        self.gates: Dict[Any, asyncio.Event] = {}
        self.requests: List[httpx.Request] = []

    def gate(self, key: Any) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[key] = event
        return event

    def page_requests(self, username: str) -> List[int]:
        return [
            int(request.url.params.get("page", "0"))
            for request in self.requests
            if request.url.path == f"/users/{username}/repos"
        ]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        if len(parts) == 3 and parts[0] == "users" and parts[2] == "repos":
            key: Tuple[str, int] | str = (parts[1], int(request.url.params.get("page", "1")))
            body = self.pages.get(parts[1], {}).get(key[1])
        elif len(parts) == 4 and parts[0] == "repos" and parts[3] == "readme":
            key = f"{parts[1]}/{parts[2]}"
            body = self.readmes.get(key)
        else:
            return httpx.Response(404, json={"message": "Not Found"})

        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()
        if body is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(body, Exception):
            raise body
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> GitHubClient:
        return GitHubClient(build_http_client(self.transport()), make_settings())


@pytest.fixture
def fake_api() -> FakeGitHubAPI:
    return FakeGitHubAPI()


async def wait_until(predicate, attempts: int = 200) -> None:
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")
