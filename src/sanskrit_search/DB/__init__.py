from .index import DocumentIndex, build_index, extract_words, query_index
from .storage import IndexSnapshot, load_index, save_index

__all__ = [
    "DocumentIndex",
    "IndexSnapshot",
    "build_index",
    "extract_words",
    "load_index",
    "query_index",
    "save_index",
]
