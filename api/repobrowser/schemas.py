from typing import List

from pydantic import BaseModel

from .models import Repository
from .state import StoreSnapshot


class FetchRequest(BaseModel):
    username: str


class ListStateOut(BaseModel):
    username: str
    repositories: List[Repository]
    current_page: int
    has_more: bool
    loading: bool
    error: str | None = None


class DetailStateOut(BaseModel):
    selected: Repository | None = None
    readme_content: str
    readme_error: bool
    readme_loading: bool


class StateResponse(BaseModel):
    version: int
    list: ListStateOut
    detail: DetailStateOut

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> "StateResponse":
        return cls.model_validate(snapshot.to_dict())


class LoadMoreResponse(BaseModel):
    accepted: bool
    state: StateResponse
