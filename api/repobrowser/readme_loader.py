import asyncio
import logging

from .errors import InvalidRepositoryPath, ReadmeUnavailable
from .github import GitHubClient
from .models import Repository
from .state import DetailState
from .store import StateStore

logger = logging.getLogger("repobrowser.readme")


class ReadmeLoader:
    """Loads the README of the selected repository into the detail state.

    Only the most recent selection may write its result. A response for an
    older selection is dropped when it arrives.
    """

    def __init__(self, store: StateStore, github: GitHubClient) -> None:
        self._store = store
        self._github = github
        self._selection = 0

    async def load_readme(self, repository: Repository) -> DetailState:
        self._selection += 1
        token = self._selection
        self._store.set_detail_state(DetailState(selected=repository, readme_loading=True))

        try:
            content = await self._github.fetch_readme(repository.owner.login, repository.name)
        except (ReadmeUnavailable, InvalidRepositoryPath) as exc:
            if token != self._selection:
                logger.info("Dropping README failure for %s: selection changed", repository.full_name)
                return self._store.detail_state
            logger.warning("README not available for %s: %s", repository.full_name, exc)
            self._store.set_detail_state(DetailState(selected=repository, readme_error=True))
            return self._store.detail_state
        except asyncio.CancelledError:
            if token == self._selection:
                self._store.set_detail_state(DetailState(selected=repository, readme_error=True))
            raise

        if token != self._selection:
            logger.info("Dropping README for %s: selection changed", repository.full_name)
            return self._store.detail_state
        self._store.set_detail_state(DetailState(selected=repository, readme_content=content))
        logger.info("Loaded README for %s (%s chars)", repository.full_name, len(content))
        return self._store.detail_state

    def dismiss(self) -> DetailState:
        self._selection += 1
        self._store.set_detail_state(DetailState())
        return self._store.detail_state
