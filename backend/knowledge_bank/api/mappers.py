"""
Mappers between domain entities and DTOs.
Separates domain layer from API layer.
"""
from typing import List, Optional

from ..domain.entities import (
    DocumentData,
    IndexingResult,
    QuotaStatus,
    Session,
    SubmissionResult,
)
from .dto import (
    DocumentDTO,
    IndexingResultDTO,
    QuotaDTO,
    SessionDTO,
    SubmissionResponseDTO,
    UserDTO,
)


class DocumentMapper:
    """Maps between DocumentData entity and DocumentDTO."""

    @staticmethod
    def to_dto(document: DocumentData) -> DocumentDTO:
        return DocumentDTO(
            id=document.id,
            created_at=document.created_at,
            category=document.category,
            title=document.title,
            summary=document.summary,
            keywords=list(document.keywords),
            relevance_score=document.relevance_score,
            file_url=document.file_url,
            file_name=document.file_name,
            user_id=document.user_id,
            author_email=document.author_email,
        )

    @staticmethod
    def to_dto_list(documents: List[DocumentData]) -> List[DocumentDTO]:
        return [DocumentMapper.to_dto(doc) for doc in documents]


class IndexingResultMapper:

    @staticmethod
    def to_dto(result: Optional[IndexingResult]) -> Optional[IndexingResultDTO]:
        if result is None:
            return None
        return IndexingResultDTO(
            category=result.category,
            title=result.title,
            summary=result.summary,
            keywords=list(result.keywords),
            relevance_score=result.relevance_score,
        )


class QuotaMapper:

    @staticmethod
    def to_dto(quota: QuotaStatus) -> QuotaDTO:
        return QuotaDTO(
            count=quota.count,
            limit=quota.limit,
            remaining=quota.remaining,
            reached=quota.reached,
        )


class SubmissionMapper:

    @staticmethod
    def to_dto(result: SubmissionResult) -> SubmissionResponseDTO:
        return SubmissionResponseDTO(
            document=DocumentMapper.to_dto(result.document),
            analysis=IndexingResultMapper.to_dto(result.analysis),
            documents=DocumentMapper.to_dto_list(result.documents),
            quota=QuotaMapper.to_dto(result.quota),
        )


class SessionMapper:

    @staticmethod
    def to_dto(session: Optional[Session]) -> Optional[SessionDTO]:
        if session is None:
            return None
        return SessionDTO(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            user=UserDTO(id=session.user.id, email=session.user.email),
        )
