import base64
import binascii
import logging
import re
from typing import Any, Dict, List

import httpx
from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import (
    InvalidRepositoryPath,
    InvalidUsername,
    ReadmeUnavailable,
    TransportOrParseError,
)
from .models import Repository

logger = logging.getLogger("repobrowser.github")

USERNAME_MAX_LENGTH = 39
_USERNAME_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9]))*$")
_PATH_SEGMENT_RE = re.compile(r"^[A-Za-z0-9._-]+$")
_WHITESPACE = re.compile(r"\s+")


def validate_username(username: str | None) -> str:
    value = (username or "").strip()
    if not value:
        raise InvalidUsername("Username is required")
    if len(value) > USERNAME_MAX_LENGTH:
        raise InvalidUsername(f"Username is longer than {USERNAME_MAX_LENGTH} characters")
    if not _USERNAME_RE.match(value):
        raise InvalidUsername(f"Invalid GitHub username: {value!r}")
    return value


def _validate_segment(value: str, label: str) -> str:
    if not value or value in (".", "..") or not _PATH_SEGMENT_RE.match(value):
        raise InvalidRepositoryPath(f"Invalid {label}: {value!r}")
    return value


def repo_readme_path(owner: str, name: str) -> str:
    return f"/repos/{_validate_segment(owner, 'owner')}/{_validate_segment(name, 'repository name')}/readme"


def parse_repositories(payload: Any) -> List[Repository]:
    if not isinstance(payload, list):
        raise TransportOrParseError(f"Expected a JSON array, got {type(payload).__name__}")
    try:
        return [Repository.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise TransportOrParseError(f"Invalid repository payload: {exc.error_count()} error(s)") from exc


def decode_readme_content(payload: Any) -> str:
    """Decode the base64 ``content`` field of a README response.

    GitHub wraps the encoded body at 60 columns, so embedded whitespace is
    removed before a strict decode. Both the base64 and the UTF-8 step reject
    invalid input instead of substituting characters.
    """
    if not isinstance(payload, dict):
        raise ReadmeUnavailable("README response is not a JSON object")
    content = payload.get("content")
    if not isinstance(content, str):
        raise ReadmeUnavailable("README response has no content")
    encoding = payload.get("encoding")
    if encoding is not None and encoding != "base64":
        raise ReadmeUnavailable(f"Unsupported README encoding: {encoding!r}")
    try:
        raw = base64.b64decode(_WHITESPACE.sub("", content), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ReadmeUnavailable("README content is not valid base64") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ReadmeUnavailable("README content is not valid UTF-8") from exc


def _default_headers(settings: Settings) -> Dict[str, str]:
    return {
        "Accept": "application/vnd.github+json",
        "User-Agent": settings.github_user_agent,
    }


def build_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    # Renamed users and repositories answer with 301 to the new location.
    return httpx.AsyncClient(transport=transport, follow_redirects=True)


class GitHubClient:
    def __init__(self, client: httpx.AsyncClient, settings: Settings | None = None) -> None:
        self._client = client
        self._settings = settings or get_settings()

    def _url(self, path: str) -> str:
        return f"{self._settings.github_api_base_url}{path}"

    async def _get_json(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        url = self._url(path)
        logger.debug("GET %s params=%s", url, params)
        response = await self._client.get(
            url,
            params=params,
            headers=_default_headers(self._settings),
            timeout=self._settings.github_timeout,
        )
        response.raise_for_status()
        return response.json()

    async def fetch_user_repos(self, username: str, page: int) -> List[Repository]:
        username = validate_username(username)
        if page < 1:
            raise ValueError("page must be >= 1")
        try:
            payload = await self._get_json(f"/users/{username}/repos", params={"page": page})
        except httpx.HTTPStatusError as exc:
            raise TransportOrParseError(
                f"GitHub returned {exc.response.status_code} for {username} page {page}"
            ) from exc
        except httpx.RequestError as exc:
            raise TransportOrParseError(f"Error fetching repositories: {exc}") from exc
        except ValueError as exc:
            raise TransportOrParseError(f"Error parsing JSON: {exc}") from exc
        return parse_repositories(payload)

    async def fetch_readme(self, owner: str, name: str) -> str:
        path = repo_readme_path(owner, name)
        try:
            payload = await self._get_json(path)
        except httpx.HTTPStatusError as exc:
            raise ReadmeUnavailable(
                f"GitHub returned {exc.response.status_code} for {owner}/{name} README"
            ) from exc
        except httpx.RequestError as exc:
            raise ReadmeUnavailable(f"Error fetching README: {exc}") from exc
        except ValueError as exc:
            raise ReadmeUnavailable(f"Error parsing JSON: {exc}") from exc
        return decode_readme_content(payload)
