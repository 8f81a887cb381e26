"""
Fake transport and listing builders shared by crawl tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import requests

from harvester.scraping.storage import InMemoryBlobStore

BASE_URL = "https://example.test/efootball"

HEADER_ROW = (
    "<tr><th>Position</th><th>Player Name</th><th>Team Name</th><th>Nationality</th>"
    "<th>Height</th><th>Weight</th><th>Age</th><th>Overall Rating</th></tr>"
)


@dataclass
class FakeResponse:
    status_code: int
    text: str = ""


@dataclass
class FakeSession:
    """
    Serves queued responses per URL; unknown URLs answer 404.
    """

    routes: dict[str, list[FakeResponse | Exception]] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    headers_seen: list[dict[str, str]] = field(default_factory=list)

    def add(self, url: str, *responses: FakeResponse | Exception) -> None:
        self.routes.setdefault(url, []).extend(responses)

    def get(self, url, headers=None, timeout=None, allow_redirects=True):
        self.calls.append(url)
        self.headers_seen.append(dict(headers or {}))
        queue = self.routes.get(url)
        if not queue:
            return FakeResponse(404, "")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def player_row(
    *,
    player_id: int | None,
    name: str,
    team: str = "Club",
    age: str = "25",
    cells: Sequence[str] | None = None,
) -> str:
    if cells is not None:
        return "<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"
    link = f'<a href="./?id={player_id}">{name}</a>' if player_id is not None else name
    return (
        f"<tr><td>CF</td><td>{link}</td><td>{team}</td><td>Argentina</td>"
        f"<td>180</td><td>75</td><td>{age}</td><td>88</td></tr>"
    )


def listing_html(rows: Sequence[str], *, last_page: int = 1, pager: bool = True) -> str:
    pager_html = ""
    if pager:
        links = "".join(f'<a href="?page={n}">{n}</a>' for n in range(1, last_page + 1))
        pager_html = f'<div class="pages">{links}<a href="?page=2">Next</a></div>'
    return (
        "<html><body>"
        "<table><tr><td>Menu</td></tr></table>"
        f"{pager_html}"
        f"<table class='players'>{HEADER_ROW}{''.join(rows)}</table>"
        "</body></html>"
    )


def page_url(page: int) -> str:
    return f"{BASE_URL}?page={page}"


def build_source(pages: Sequence[Sequence[str]]) -> FakeSession:
    """
    Serve a listing whose pages hold the given rows.
    """

    session = FakeSession()
    last_page = len(pages)
    for number, rows in enumerate(pages, start=1):
        html = listing_html(rows, last_page=last_page)
        if number == 1:
            session.add(BASE_URL, FakeResponse(200, html))
        session.add(page_url(number), FakeResponse(200, html))
    return session


def distinct_pages(page_count: int, per_page: int) -> list[list[str]]:
    return [
        [
            player_row(player_id=page * 100 + index, name=f"Player {page}-{index}")
            for index in range(per_page)
        ]
        for page in range(1, page_count + 1)
    ]


def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")


class FailingWriteStore(InMemoryBlobStore):
    """
    In-memory store whose writes to `failing_keys` raise OSError.
    """

    def __init__(self, *failing_keys: str) -> None:
        super().__init__()
        self.failing_keys = set(failing_keys)

    def write_text(self, key: str, text: str) -> None:
        if key in self.failing_keys:
            raise OSError(28, "No space left on device")
        super().write_text(key, text)
