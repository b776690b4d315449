import asyncio
import logging
from dataclasses import replace

from .errors import TransportOrParseError
from .github import GitHubClient, validate_username
from .state import ListState
from .store import StateStore

logger = logging.getLogger("repobrowser.repo_list")


class RepositoryListController:
    """Paginated fetch of a user's repositories into the store's list state.

    Each ``start_fetch`` opens a new generation. A page response that arrives
    after a newer generation has started is dropped, so it can neither append
    to the new list nor clear its loading flag.
    """

    def __init__(self, store: StateStore, github: GitHubClient) -> None:
        self._store = store
        self._github = github
        self._generation = 0

    async def start_fetch(self, username: str) -> ListState:
        username = validate_username(username)
        self._generation += 1
        self._store.set_list_state(ListState(username=username, loading=True))
        logger.info("Fetching repositories for %s", username)
        await self._fetch_page(self._generation, username, 1)
        return self._store.list_state

    async def load_more(self) -> bool:
        state = self._store.list_state
        if not state.fetched or state.loading or not state.has_more:
            logger.debug(
                "Ignoring load more (fetched=%s loading=%s has_more=%s)",
                state.fetched,
                state.loading,
                state.has_more,
            )
            return False
        # A failed page keeps its number so the next call asks for it again.
        page = state.current_page if state.error else state.current_page + 1
        self._store.set_list_state(replace(state, current_page=page, loading=True, error=None))
        await self._fetch_page(self._generation, state.username, page)
        return True

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _fetch_page(self, generation: int, username: str, page: int) -> None:
        try:
            items = await self._github.fetch_user_repos(username, page)
        except TransportOrParseError as exc:
            if not self._is_current(generation):
                logger.info("Dropping failed page %s for %s: superseded", page, username)
                return
            logger.warning("Failed to fetch page %s for %s: %s", page, username, exc)
            self._store.set_list_state(replace(self._store.list_state, loading=False, error=str(exc)))
            return
        except asyncio.CancelledError:
            if self._is_current(generation):
                self._store.set_list_state(
                    replace(self._store.list_state, loading=False, error="Request cancelled")
                )
            raise

        if not self._is_current(generation):
            logger.info("Dropping page %s for %s: superseded", page, username)
            return
        state = self._store.list_state
        self._store.set_list_state(state.append_page(tuple(items)))
        logger.info(
            "Fetched page %s for %s: %s repositories (%s total)",
            page,
            username,
            len(items),
            len(state.repositories) + len(items),
        )
