from .comments_client import CommentsClient
from .config import ClientConfig, ConfigError, load_config
from .coordinator import FetchCommand, FetchCoordinator, FetchOutcome, FetchStatus, Resolution
from .exceptions import ApiError, DecodeError, InvalidParameter, NetworkError, RequestCancelled, ServerError
from .http_client import ApiResponse, HttpClient
from .models import Comment, CommentPage, Pagination, SortOrder, SortState, TableMode, TableState
from .notifications import Notification, NotificationCenter
from .query_builder import QueryPlan, RangeWindow, build_query, compute_range
from .search_validator import SearchValidation, validate
from .session import BrowserSession

__all__ = [
    "ApiError",
    "ApiResponse",
    "BrowserSession",
    "ClientConfig",
    "Comment",
    "CommentPage",
    "CommentsClient",
    "ConfigError",
    "DecodeError",
    "FetchCommand",
    "FetchCoordinator",
    "FetchOutcome",
    "FetchStatus",
    "HttpClient",
    "InvalidParameter",
    "NetworkError",
    "Notification",
    "NotificationCenter",
    "Pagination",
    "QueryPlan",
    "RangeWindow",
    "RequestCancelled",
    "Resolution",
    "SearchValidation",
    "ServerError",
    "SortOrder",
    "SortState",
    "TableMode",
    "TableState",
    "build_query",
    "compute_range",
    "load_config",
    "validate",
]
