"""Global search state."""

from typing import Optional

from pydantic import BaseModel, Field

from nmsdash.core.domain.models import SearchResultResponse
from nmsdash.sdk.decorators import action, getter, mutation, state_module
from nmsdash.sdk.module import BaseStateModule


class SearchState(BaseModel):
    search_results: list[SearchResultResponse] = Field(default_factory=list)
    last_query: Optional[str] = None


@state_module(key="search", description="Free-text search results grouped by context")
class SearchModule(BaseStateModule):
    def initial_state(self) -> SearchState:
        return SearchState()

    @mutation()
    def save_search_results(self, results: list[SearchResultResponse]) -> None:
        self._state.search_results = list(results)

    @mutation()
    def save_last_query(self, term: str) -> None:
        self._state.last_query = term

    @mutation()
    def clear_search_results(self) -> None:
        self._state.search_results = []
        self._state.last_query = None

    @action()
    async def search(self, term: str) -> list[SearchResultResponse]:
        """Search the backend; an empty term just clears the results."""
        term = term.strip()
        if not term:
            self.commit("clear_search_results")
            return []

        self.commit("save_last_query", term)
        return await self.fetch(
            "search",
            lambda: self.context.api.search(term),
            "save_search_results",
        )

    @getter()
    def search_results(self) -> list[SearchResultResponse]:
        return list(self._state.search_results)

    @getter()
    def last_query(self) -> Optional[str]:
        return self._state.last_query
