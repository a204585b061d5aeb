"""
Utility modules - Pure helper functions.
"""
from .filenames import build_storage_path, file_extension, sanitize_filename, strip_extension
from .keywords import build_websearch_query, literal_terms, merge_keywords

__all__ = [
    "build_storage_path",
    "file_extension",
    "sanitize_filename",
    "strip_extension",
    "build_websearch_query",
    "literal_terms",
    "merge_keywords",
]
