from local_careers.sources.base import JobSource
from local_careers.sources.json_feed import JsonFeedSource, extract_items

__all__ = [
    "JobSource",
    "JsonFeedSource",
    "extract_items",
]
