import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from ..deps import get_session
from ..errors import InvalidUsername
from ..session import BrowserSession
from ..view import ViewNode, build_view, render_html

logger = logging.getLogger("repobrowser.api")

router = APIRouter()


def _back_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/view", response_model=ViewNode)
async def view(session: BrowserSession = Depends(get_session)) -> ViewNode:
    return build_view(session.store.snapshot())


@router.get("/", response_class=HTMLResponse)
async def index(session: BrowserSession = Depends(get_session)) -> HTMLResponse:
    return HTMLResponse(render_html(build_view(session.store.snapshot())))


@router.post("/ui/fetch")
async def ui_fetch(
    username: str = Form(""),
    session: BrowserSession = Depends(get_session),
) -> RedirectResponse:
    try:
        await session.repositories.start_fetch(username)
    except InvalidUsername as exc:
        logger.info("Rejected username from form: %s", exc)
    return _back_home()


@router.post("/ui/more")
async def ui_more(session: BrowserSession = Depends(get_session)) -> RedirectResponse:
    await session.repositories.load_more()
    return _back_home()


@router.post("/ui/select/{repo_id}")
async def ui_select(repo_id: int, session: BrowserSession = Depends(get_session)) -> RedirectResponse:
    if not await session.select(repo_id):
        logger.info("Ignoring selection of unknown repository %s", repo_id)
    return _back_home()


@router.post("/ui/dismiss")
async def ui_dismiss(session: BrowserSession = Depends(get_session)) -> RedirectResponse:
    session.readme.dismiss()
    return _back_home()
