"""
Crawl configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/118.0 Safari/537.36"
)


@dataclass(frozen=True)
class CrawlSettings:
    """
    Runtime settings for one paginated source.
    """

    base_url: str = "https://pesdb.net/efootball"
    referer: str = "https://pesdb.net/"
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "es-AR,es;q=0.9,en;q=0.8"
    timeout_seconds: float = 30.0
    max_attempts: int = 5
    max_backoff_seconds: float = 60.0
    delay_min_seconds: float = 2.5
    delay_max_seconds: float = 4.0
    max_pages: int = 100
    pagination_selector: str = ".pages a"
    table_markers: tuple[str, ...] = ("player name", "overall")
    extra_headers: dict[str, str] = field(default_factory=dict)

    def request_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self.accept_language,
            "Referer": self.referer,
            "Cache-Control": "no-cache",
            **self.extra_headers,
        }


@dataclass(frozen=True)
class StorageSettings:
    """
    Where snapshot and checkpoint blobs live.
    """

    data_dir: str = "data"
    snapshot_key: str = "data.json"
    checkpoint_key: str = "checkpoint.json"
