from typing import Optional

from .github import GitHubClient
from .models import Repository
from .readme_loader import ReadmeLoader
from .repo_list import RepositoryListController
from .store import StateStore


class BrowserSession:
    """One single-screen browsing session: a store and the two controllers writing to it."""

    def __init__(self, github: GitHubClient, store: StateStore | None = None) -> None:
        self.store = store or StateStore()
        self.repositories = RepositoryListController(self.store, github)
        self.readme = ReadmeLoader(self.store, github)

    def find_repository(self, repo_id: int) -> Optional[Repository]:
        return self.store.list_state.find(repo_id)

    async def select(self, repo_id: int) -> bool:
        repository = self.find_repository(repo_id)
        if repository is None:
            return False
        await self.readme.load_readme(repository)
        return True
