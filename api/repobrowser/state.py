"""Immutable snapshots of the UI state shared between controllers and views."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .models import Repository


@dataclass(frozen=True)
class ListState:
    username: str = ""
    repositories: Tuple[Repository, ...] = ()
    current_page: int = 1
    has_more: bool = True
    loading: bool = False
    error: Optional[str] = None

    @property
    def fetched(self) -> bool:
        """True once a username fetch has been started."""
        return bool(self.username)

    def find(self, repo_id: int) -> Optional[Repository]:
        for repo in self.repositories:
            if repo.id == repo_id:
                return repo
        return None

    def append_page(self, items: Tuple[Repository, ...]) -> "ListState":
        return replace(
            self,
            repositories=self.repositories + items,
            has_more=bool(items),
            loading=False,
            error=None,
        )


@dataclass(frozen=True)
class DetailState:
    selected: Optional[Repository] = None
    readme_content: str = ""
    readme_error: bool = False
    readme_loading: bool = False


@dataclass(frozen=True)
class StoreSnapshot:
    list_state: ListState = field(default_factory=ListState)
    detail_state: DetailState = field(default_factory=DetailState)
    version: int = 0

    def to_dict(self) -> Dict[str, Any]:
        list_state = self.list_state
        detail = self.detail_state
        return {
            "version": self.version,
            "list": {
                "username": list_state.username,
                "repositories": [repo.model_dump() for repo in list_state.repositories],
                "current_page": list_state.current_page,
                "has_more": list_state.has_more,
                "loading": list_state.loading,
                "error": list_state.error,
            },
            "detail": {
                "selected": detail.selected.model_dump() if detail.selected else None,
                "readme_content": detail.readme_content,
                "readme_error": detail.readme_error,
                "readme_loading": detail.readme_loading,
            },
        }
