from __future__ import annotations

from dataclasses import dataclass

from .comments_client import CommentsClient
from .config import ClientConfig, load_config
from .coordinator import FetchCoordinator
from .http_client import HttpClient
from .notifications import NotificationCenter


@dataclass
class BrowserSession:
    config: ClientConfig
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        self.http = self.http or HttpClient(config=self.config)

    @classmethod
    def from_env(cls, env_file: str | None = None) -> BrowserSession:
        return cls(config=load_config(env_file))

    def comments_client(self) -> CommentsClient:
        return CommentsClient(http=self.http)

    def coordinator(self, notifications: NotificationCenter | None = None) -> FetchCoordinator:
        return FetchCoordinator(
            self.comments_client(),
            page_size=self.config.page_size,
            notifications=notifications,
        )
