"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.

Field names follow the client's camelCase contract through aliases.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class IndexingResultDTO(BaseModel):
    """AI analysis shown after a document is indexed."""
    model_config = ConfigDict(populate_by_name=True)

    category: str
    title: str
    summary: str
    keywords: List[str]
    relevance_score: float = Field(alias="relevanceScore", ge=0, le=1)


class DocumentDTO(BaseModel):
    """Document DTO for API responses."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: str
    category: str
    title: str
    summary: str
    keywords: List[str]
    relevance_score: float = Field(alias="relevanceScore")
    file_url: str = Field(alias="fileUrl")
    file_name: str = Field(alias="fileName")
    user_id: str = Field(alias="userId")
    author_email: Optional[str] = Field(default=None, alias="authorEmail")


class QuotaDTO(BaseModel):
    """Daily upload quota."""
    count: int
    limit: int
    remaining: int
    reached: bool


class SubmissionResponseDTO(BaseModel):
    """Response of a successful upload."""
    document: DocumentDTO
    analysis: Optional[IndexingResultDTO] = None
    documents: List[DocumentDTO]
    quota: QuotaDTO


class SearchResponseDTO(BaseModel):
    """Explore view search results."""
    mode: str
    query: str
    total: int
    results: List[DocumentDTO]


class CategoriesDTO(BaseModel):
    categories: List[str]


class PreviewDTO(BaseModel):
    """Which viewer to use for a stored file."""
    model_config = ConfigDict(populate_by_name=True)

    kind: str
    title: str
    file_url: str = Field(alias="fileUrl")
    file_name: str = Field(alias="fileName")


class CredentialsDTO(BaseModel):
    """Email and password submitted by the login form."""
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class UserDTO(BaseModel):
    id: str
    email: Optional[str] = None


class SessionDTO(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    user: UserDTO


class SignUpResponseDTO(BaseModel):
    """Sign-up result; no session while email confirmation is pending."""
    session: Optional[SessionDTO] = None
    confirmation_required: bool


class OAuthDTO(BaseModel):
    provider: str
    url: str
