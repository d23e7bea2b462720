"""eustat 公開API。"""

from eustat.client import AsyncEurostatClient, EurostatClient, fetch_dataset
from eustat.decoder import decode
from eustat.enums import Format, Lang, SearchCollection
from eustat.errors import (
    EurostatApiError,
    EurostatBadRequestError,
    EurostatError,
    EurostatFormatError,
    EurostatNotFoundError,
    EurostatParseError,
    EurostatServerError,
    EurostatStructureError,
    EurostatTransportError,
    EurostatValidationError,
)
from eustat.labels import DEFAULT_LABEL_PARSERS, LabelParserRegistry, parse_time_label
from eustat.models import Dataset
from eustat.types import (
    Category,
    DatasetInfo,
    DatasetMetadata,
    Dimension,
    RawDataset,
    Row,
    SearchResult,
)

__all__ = [
    "AsyncEurostatClient",
    "Category",
    "DEFAULT_LABEL_PARSERS",
    "Dataset",
    "DatasetInfo",
    "DatasetMetadata",
    "Dimension",
    "EurostatApiError",
    "EurostatBadRequestError",
    "EurostatClient",
    "EurostatError",
    "EurostatFormatError",
    "EurostatNotFoundError",
    "EurostatParseError",
    "EurostatServerError",
    "EurostatStructureError",
    "EurostatTransportError",
    "EurostatValidationError",
    "Format",
    "LabelParserRegistry",
    "Lang",
    "RawDataset",
    "Row",
    "SearchCollection",
    "SearchResult",
    "decode",
    "fetch_dataset",
    "parse_time_label",
]
