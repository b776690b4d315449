import asyncio
import json
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from ..deps import get_session
from ..session import BrowserSession
from ..state import StoreSnapshot
from ..store import StateStore

KEEPALIVE_SECONDS = 15.0

router = APIRouter()


def _format_event(snapshot: StoreSnapshot) -> str:
    data = json.dumps(snapshot.to_dict(), separators=(",", ":"))
    return f"event: state\nid: {snapshot.version}\ndata: {data}\n\n"


async def _event_stream(
    request: Request,
    store: StateStore,
    keepalive: float = KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    queue: asyncio.Queue[StoreSnapshot] = asyncio.Queue()
    unsubscribe = store.subscribe(queue.put_nowait)
    try:
        yield _format_event(store.snapshot())
        while not await request.is_disconnected():
            try:
                snapshot = await asyncio.wait_for(queue.get(), timeout=keepalive)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield _format_event(snapshot)
    finally:
        unsubscribe()


@router.get("/events")
async def events(request: Request, session: BrowserSession = Depends(get_session)) -> StreamingResponse:
    return StreamingResponse(
        _event_stream(request, session.store),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
