from .search_port import SearchPort
from .document_source_port import DocumentSourcePort
from .result_parser_port import ResultParserPort

__all__ = [
    "SearchPort",
    "DocumentSourcePort",
    "ResultParserPort",
]
