from .data_service import (
    get_last_search,
    save_last_search,
)

__all__ = [
    "get_last_search",
    "save_last_search",
]
