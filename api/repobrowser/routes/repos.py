from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_session
from ..errors import InvalidUsername
from ..schemas import FetchRequest, LoadMoreResponse, StateResponse
from ..session import BrowserSession

router = APIRouter()


@router.get("/state", response_model=StateResponse)
async def state(session: BrowserSession = Depends(get_session)) -> StateResponse:
    return StateResponse.from_snapshot(session.store.snapshot())


@router.post("/repos/fetch", response_model=StateResponse)
async def fetch_repos(payload: FetchRequest, session: BrowserSession = Depends(get_session)) -> StateResponse:
    try:
        await session.repositories.start_fetch(payload.username)
    except InvalidUsername as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return StateResponse.from_snapshot(session.store.snapshot())


@router.post("/repos/more", response_model=LoadMoreResponse)
async def load_more(session: BrowserSession = Depends(get_session)) -> LoadMoreResponse:
    accepted = await session.repositories.load_more()
    return LoadMoreResponse(accepted=accepted, state=StateResponse.from_snapshot(session.store.snapshot()))


@router.post("/repos/{repo_id}/select", response_model=StateResponse)
async def select_repo(repo_id: int, session: BrowserSession = Depends(get_session)) -> StateResponse:
    if not await session.select(repo_id):
        raise HTTPException(status_code=404, detail="Repository not loaded")
    return StateResponse.from_snapshot(session.store.snapshot())


@router.delete("/detail", response_model=StateResponse)
async def dismiss_detail(session: BrowserSession = Depends(get_session)) -> StateResponse:
    session.readme.dismiss()
    return StateResponse.from_snapshot(session.store.snapshot())
