"""
Domain entities - Core business objects.
These represent the business concepts, not database models.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .value_objects import UserId


@dataclass
class IndexingResult:
    """
    Structured metadata derived from an uploaded file.
    Produced by the AI provider or synthesized locally for media files.
    """
    category: str
    title: str
    summary: str
    keywords: List[str]
    relevance_score: float  # between 0 and 1


@dataclass
class DocumentData:
    """
    Document entity - an indexed file in a user's knowledge bank.
    `id` and `created_at` are assigned by the backend on insert.
    """
    id: str
    created_at: str
    category: str
    title: str
    summary: str
    keywords: List[str]
    relevance_score: float
    file_url: str
    file_name: str
    user_id: UserId
    author_email: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any], author_email: Optional[str] = None) -> "DocumentData":
        """Build an entity from a snake_case documents row."""
        return cls(
            id=str(row.get("id")),
            created_at=str(row.get("created_at")),
            category=row.get("category"),
            title=row.get("title"),
            summary=row.get("summary"),
            keywords=list(row.get("keywords") or []),
            relevance_score=row.get("relevance_score"),
            file_url=row.get("file_url"),
            file_name=row.get("file_name") or "",
            user_id=row.get("user_id"),
            author_email=author_email,
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over title, summary, category and keywords."""
        corpus = " ".join([
            self.title or "",
            self.summary or "",
            self.category or "",
            " ".join(self.keywords),
        ])
        return term.lower() in corpus.lower()


@dataclass
class NewDocument:
    """A document that has not been persisted yet (no id, no created_at)."""
    analysis: IndexingResult
    file_url: str
    file_name: str
    user_id: UserId

    def to_row(self) -> Dict[str, Any]:
        """Map to the snake_case columns of the documents table."""
        return {
            "title": self.analysis.title,
            "summary": self.analysis.summary,
            "keywords": list(self.analysis.keywords),
            "relevance_score": self.analysis.relevance_score,
            "category": self.analysis.category,
            "file_url": self.file_url,
            "user_id": self.user_id,
            "file_name": self.file_name,
        }


@dataclass
class UserIdentity:
    id: UserId
    email: Optional[str] = None


@dataclass
class Session:
    """An authenticated session returned by the auth backend."""
    access_token: str
    user: UserIdentity
    refresh_token: Optional[str] = None


@dataclass
class QuotaStatus:
    """Daily upload quota of one user."""
    count: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(self.limit - self.count, 0)

    @property
    def reached(self) -> bool:
        return self.count >= self.limit


@dataclass
class SubmissionResult:
    """Outcome of a successful submission plus the refreshed knowledge bank."""
    document: DocumentData
    analysis: Optional[IndexingResult]
    documents: List[DocumentData] = field(default_factory=list)
    quota: Optional[QuotaStatus] = None
