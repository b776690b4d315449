"""Declarative view tree for the browser screen.

``build_view`` is a pure function of a store snapshot. Any front end can
render the resulting tree; ``render_html`` is the one served at ``/``.
"""

from html import escape
from typing import Any, Dict, List
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from .models import Repository
from .state import DetailState, ListState, StoreSnapshot

NO_DESCRIPTION = "No description"
README_UNAVAILABLE = "README not available"


class ViewNode(BaseModel):
    kind: str
    key: str | None = None
    props: Dict[str, Any] = Field(default_factory=dict)
    children: List["ViewNode"] = Field(default_factory=list)


ViewNode.model_rebuild()


def _is_web_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _card(repo: Repository) -> ViewNode:
    return ViewNode(
        kind="card",
        key=f"repo-{repo.id}",
        props={"action": f"/ui/select/{repo.id}"},
        children=[
            ViewNode(kind="heading", props={"text": repo.name}),
            ViewNode(
                kind="text",
                props={
                    "text": f"\u2b50 {repo.stargazers_count} | \U0001f374 {repo.forks_count}",
                    "stars": repo.stargazers_count,
                    "forks": repo.forks_count,
                },
            ),
            ViewNode(kind="text", props={"text": repo.description or NO_DESCRIPTION}),
        ],
    )


def _list_section(state: ListState) -> List[ViewNode]:
    nodes = [
        ViewNode(
            kind="form",
            key="fetch",
            props={"action": "/ui/fetch"},
            children=[
                ViewNode(
                    kind="text_input",
                    key="username",
                    props={"name": "username", "value": state.username, "placeholder": "Enter GitHub username"},
                ),
                ViewNode(kind="button", key="fetch-button", props={"label": "Fetch Repositories"}),
            ],
        ),
    ]
    if state.loading:
        nodes.append(ViewNode(kind="progress", key="list-loading", props={"label": "Loading..."}))
    if state.error:
        nodes.append(ViewNode(kind="error", key="list-error", props={"text": state.error}))
    cards = ViewNode(kind="list", key="repositories", children=[_card(repo) for repo in state.repositories])
    if state.fetched and state.has_more:
        cards.children.append(
            ViewNode(
                kind="form",
                key="load-more",
                props={"action": "/ui/more"},
                children=[ViewNode(kind="button", props={"label": "Load More", "disabled": state.loading})],
            )
        )
    nodes.append(cards)
    return nodes


def _sheet(detail: DetailState) -> ViewNode | None:
    repo = detail.selected
    if repo is None:
        return None
    children = [ViewNode(kind="heading", props={"text": repo.name, "level": 1})]
    if repo.description:
        children.append(ViewNode(kind="text", props={"text": repo.description}))
    if _is_web_url(repo.html_url):
        children.append(ViewNode(kind="link", props={"label": "View on GitHub", "href": repo.html_url}))
    if detail.readme_error:
        children.append(ViewNode(kind="error", key="readme-error", props={"text": README_UNAVAILABLE}))
    elif detail.readme_loading:
        children.append(ViewNode(kind="progress", key="readme-loading", props={"label": "Loading README..."}))
    else:
        children.append(ViewNode(kind="text", key="readme", props={"text": detail.readme_content, "pre": True}))
    return ViewNode(
        kind="sheet",
        key=f"detail-{repo.id}",
        props={"dismiss": "/ui/dismiss"},
        children=children,
    )


def build_view(snapshot: StoreSnapshot) -> ViewNode:
    children = _list_section(snapshot.list_state)
    sheet = _sheet(snapshot.detail_state)
    if sheet is not None:
        children.append(sheet)
    return ViewNode(kind="screen", key="browser", props={"version": snapshot.version}, children=children)


def _render_children(node: ViewNode) -> str:
    return "".join(render_html(child) for child in node.children)


def render_html(node: ViewNode) -> str:
    props = node.props
    kind = node.kind
    if kind == "screen":
        return (
            "<!doctype html><html><head><meta charset=\"utf-8\"><title>Repositories</title></head>"
            f"<body><main>{_render_children(node)}</main></body></html>"
        )
    if kind == "form":
        return f"<form method=\"post\" action=\"{escape(props['action'])}\">{_render_children(node)}</form>"
    if kind == "text_input":
        return (
            f"<input type=\"text\" name=\"{escape(props['name'])}\" "
            f"placeholder=\"{escape(props['placeholder'])}\" value=\"{escape(props['value'])}\">"
        )
    if kind == "button":
        disabled = " disabled" if props.get("disabled") else ""
        return f"<button type=\"submit\"{disabled}>{escape(props['label'])}</button>"
    if kind == "progress":
        return f"<p class=\"progress\">{escape(props['label'])}</p>"
    if kind == "error":
        return f"<p class=\"error\" style=\"color:red\">{escape(props['text'])}</p>"
    if kind == "list":
        return f"<section class=\"repositories\">{_render_children(node)}</section>"
    if kind == "card":
        # A button only takes phrasing content.
        inline = "".join(
            f"<span class=\"{escape(child.kind)}\">{escape(str(child.props.get('text', '')))}</span>"
            for child in node.children
        )
        return (
            f"<form class=\"card\" method=\"post\" action=\"{escape(props['action'])}\">"
            f"<button type=\"submit\">{inline}</button></form>"
        )
    if kind == "heading":
        level = 1 if props.get("level") == 1 else 3
        return f"<h{level}>{escape(props['text'])}</h{level}>"
    if kind == "text":
        if props.get("pre"):
            return f"<pre>{escape(props['text'])}</pre>"
        return f"<p>{escape(props['text'])}</p>"
    if kind == "link":
        return f"<a href=\"{escape(props['href'])}\" target=\"_blank\" rel=\"noopener\">{escape(props['label'])}</a>"
    if kind == "sheet":
        return (
            f"<aside class=\"sheet\">{_render_children(node)}"
            f"<form method=\"post\" action=\"{escape(props['dismiss'])}\"><button type=\"submit\">Close</button></form>"
            "</aside>"
        )
    raise ValueError(f"Unknown view node kind: {kind}")
