"""サービス層モジュール。"""

from eustat.services.data import AsyncDataService, DataService
from eustat.services.metadata import AsyncMetadataService, MetadataService
from eustat.services.search import AsyncSearchService, SearchService

__all__ = [
    "AsyncDataService",
    "AsyncMetadataService",
    "AsyncSearchService",
    "DataService",
    "MetadataService",
    "SearchService",
]
