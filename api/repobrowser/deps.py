from fastapi import Request

from .session import BrowserSession


def get_session(request: Request) -> BrowserSession:
    return request.app.state.session
