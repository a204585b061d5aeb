"""
Keyword utilities for topic search.
"""
from typing import Iterable, List

# Literal query terms must be longer than this to count as keywords
MIN_LITERAL_TERM_LENGTH = 2


def literal_terms(query: str) -> List[str]:
    """Whitespace-split terms of the user's query longer than two characters."""
    return [term for term in query.split() if len(term) > MIN_LITERAL_TERM_LENGTH]


def merge_keywords(*keyword_lists: Iterable[str]) -> List[str]:
    """
    Union of keyword lists without duplicates, keeping first-seen order.

    Comparison is case-sensitive, exactly as the keywords were generated.
    Blank entries are dropped.
    """
    merged: List[str] = []
    seen = set()
    for keywords in keyword_lists:
        for keyword in keywords:
            if not isinstance(keyword, str):
                continue
            keyword = keyword.strip()
            if keyword and keyword not in seen:
                seen.add(keyword)
                merged.append(keyword)
    return merged


def build_websearch_query(keywords: Iterable[str]) -> str:
    """
    Join keywords into a Postgres websearch OR query.

    Multi-word keywords are quoted so they match as phrases:
        ["ia", "machine learning"] -> 'ia or "machine learning"'
    """
    terms = []
    for keyword in keywords:
        keyword = keyword.replace('"', "").strip()
        if not keyword:
            continue
        terms.append(f'"{keyword}"' if " " in keyword else keyword)
    return " or ".join(terms)
