import pytest

from knowledge_bank.api.exceptions import (
    AnalysisError,
    FileTooLargeError,
    InsertError,
    SubmissionInProgressError,
    UnsupportedFileError,
    UploadError,
)
from knowledge_bank.domain.value_objects import MediaKind
from knowledge_bank.services.ai_service import AIService
from knowledge_bank.services.database import MemoryAdapter
from knowledge_bank.services.quota_service import QuotaService
from knowledge_bank.services.storage import MemoryFileStorage
from knowledge_bank.services.submission_service import (
    IncomingFile,
    SubmissionGuard,
    SubmissionService,
    placeholder_analysis,
    validate_incoming_file,
)

from conftest import StubProvider

USER_ID = "user-1"


def pdf(name="report.pdf", content=b"%PDF-1.4 report"):
    return IncomingFile(content=content, file_name=name, content_type="application/pdf")


class FailingInsertAdapter(MemoryAdapter):
    async def insert_document(self, row):
        raise RuntimeError("insert rejected")


class FailingStorage(MemoryFileStorage):
    async def upload(self, file_path, content, content_type):
        raise RuntimeError("bucket unavailable")


class NoUrlStorage(MemoryFileStorage):
    async def get_public_url(self, file_path):
        return ""


@pytest.mark.asyncio
async def test_submit_document_persists_ai_fields(submission_service, storage):
    result = await submission_service.submit(pdf(), USER_ID)

    document = result.document
    assert document.id
    assert document.created_at
    assert document.title == "Informe anual"
    assert document.summary == "Resumen del informe anual de la empresa."
    assert document.category == "Finanzas"
    assert document.keywords == ["informe", "finanzas", "resultados"]
    assert document.relevance_score == 0.8
    assert document.file_name == "report.pdf"
    assert document.user_id == USER_ID

    [path] = storage.paths
    assert storage.get_object(path) == (b"%PDF-1.4 report", "application/pdf")
    assert path.startswith(f"{USER_ID}/")
    assert path.endswith("-report.pdf")
    assert document.file_url == f"memory://storage/documentos/{path}"


@pytest.mark.asyncio
async def test_submit_refreshes_documents_and_quota(submission_service):
    await submission_service.submit(pdf("first.pdf"), USER_ID)
    result = await submission_service.submit(pdf("second.pdf"), USER_ID)

    assert [d.file_name for d in result.documents] == ["second.pdf", "first.pdf"]
    assert result.quota.count == 2
    assert result.quota.remaining == 3
    assert result.analysis.title == "Informe anual"


@pytest.mark.asyncio
async def test_submit_audio_skips_analysis(submission_service, provider):
    audio = IncomingFile(content=b"ID3", file_name="song.final.mp3", content_type="audio/mpeg")

    result = await submission_service.submit(audio, USER_ID)

    assert provider.analyzed == []
    assert result.analysis is None
    assert result.document.title == "song.final.mp3"
    assert result.document.category == "Audio"
    assert result.document.summary == "Audio file: song.final.mp3."
    assert result.document.keywords == ["song.final"]
    assert result.document.relevance_score == 0


@pytest.mark.asyncio
async def test_submit_video_skips_analysis(submission_service, provider):
    video = IncomingFile(content=b"\x00", file_name="clip.mp4", content_type="video/mp4")

    result = await submission_service.submit(video, USER_ID)

    assert provider.analyzed == []
    assert result.document.category == "Video"
    assert result.document.keywords == ["clip"]
    assert result.document.relevance_score == 0


@pytest.mark.asyncio
async def test_analysis_failure_aborts_before_upload(db, storage, quota_service):
    ai_service = AIService(provider=StubProvider(analysis={"title": "incomplete"}))
    service = SubmissionService(ai_service, storage, db, quota_service)

    with pytest.raises(AnalysisError):
        await service.submit(pdf(), USER_ID)

    assert storage.paths == []
    assert await db.list_documents_by_owner(USER_ID) == []


@pytest.mark.asyncio
async def test_upload_failure_aborts_before_insert(ai_service, db, quota_service):
    service = SubmissionService(ai_service, FailingStorage(), db, quota_service)

    with pytest.raises(UploadError):
        await service.submit(pdf(), USER_ID)

    assert await db.list_documents_by_owner(USER_ID) == []


@pytest.mark.asyncio
async def test_missing_public_url_is_an_upload_error(ai_service, db, quota_service):
    service = SubmissionService(ai_service, NoUrlStorage(), db, quota_service)

    with pytest.raises(UploadError):
        await service.submit(pdf(), USER_ID)


@pytest.mark.asyncio
async def test_insert_failure_leaves_uploaded_file(ai_service, storage, quota_service):
    service = SubmissionService(ai_service, storage, FailingInsertAdapter(), quota_service)

    with pytest.raises(InsertError):
        await service.submit(pdf(), USER_ID)

    assert len(storage.paths) == 1


@pytest.mark.asyncio
async def test_store_file_uses_sanitized_name(submission_service):
    url = await submission_service.store_file(pdf("Informe Año.PDF"), USER_ID, timestamp_ms=1700000000000)
    assert url == "memory://storage/documentos/user-1/1700000000000-informe-ano.pdf"


@pytest.mark.asyncio
async def test_list_documents_returns_empty_on_error(ai_service, storage, quota_service):
    class BrokenAdapter(MemoryAdapter):
        async def list_documents_by_owner(self, user_id):
            raise RuntimeError("connection reset")

    service = SubmissionService(ai_service, storage, BrokenAdapter(), quota_service)
    assert await service.list_documents(USER_ID) == []


def test_placeholder_analysis_for_audio():
    result = placeholder_analysis("interview.wav", MediaKind.AUDIO)
    assert result.keywords == ["interview"]
    assert result.relevance_score == 0
    assert result.summary == "Audio file: interview.wav."


def test_validate_accepts_documents_and_media():
    validate_incoming_file(pdf())
    validate_incoming_file(IncomingFile(b"# t", "notes.md", "text/markdown"))
    validate_incoming_file(IncomingFile(b"t", "notes.txt", "text/plain"))
    validate_incoming_file(IncomingFile(b"\x00", "clip.webm", "video/webm"))
    validate_incoming_file(IncomingFile(b"\x00", "song.ogg", "audio/ogg"))


def test_validate_rejects_unsupported_types():
    with pytest.raises(UnsupportedFileError):
        validate_incoming_file(IncomingFile(b"\x89PNG", "photo.png", "image/png"))
    with pytest.raises(UnsupportedFileError):
        validate_incoming_file(IncomingFile(b"PK", "doc.docx", ""))


def test_validate_rejects_large_files():
    big = pdf(content=b"x" * (5 * 1024 * 1024 + 1))

    with pytest.raises(FileTooLargeError) as exc_info:
        validate_incoming_file(big)

    assert str(exc_info.value) == "The file is too large. The maximum size is 5 MB."


@pytest.mark.asyncio
async def test_guard_allows_one_submission_per_user():
    guard = SubmissionGuard()

    async with guard.hold(USER_ID):
        assert guard.is_busy(USER_ID)
        with pytest.raises(SubmissionInProgressError):
            async with guard.hold(USER_ID):
                pass
        async with guard.hold("someone-else"):
            assert guard.is_busy("someone-else")

    assert not guard.is_busy(USER_ID)
    async with guard.hold(USER_ID):
        pass


@pytest.mark.asyncio
async def test_guard_releases_on_error():
    guard = SubmissionGuard()

    with pytest.raises(RuntimeError):
        async with guard.hold(USER_ID):
            raise RuntimeError("boom")

    assert not guard.is_busy(USER_ID)


@pytest.mark.asyncio
async def test_quota_counts_only_this_users_uploads(ai_service, storage, db):
    service = SubmissionService(ai_service, storage, db, QuotaService(db, limit=5))
    await service.submit(pdf("a.pdf"), "other-user")

    result = await service.submit(pdf("b.pdf"), USER_ID)

    assert result.quota.count == 1


@pytest.mark.asyncio
async def test_list_documents_filters_by_term(submission_service, db):
    await db.insert_document({
        "title": "Informe anual", "summary": "Cuentas del año.", "category": "Finanzas",
        "keywords": ["balance"], "relevance_score": 0.8, "file_url": "u1", "file_name": "a.pdf",
        "user_id": USER_ID, "created_at": "2024-06-10T10:00:00+00:00",
    })
    await db.insert_document({
        "title": "Receta", "summary": "Pan casero.", "category": "Cocina",
        "keywords": ["Masa Madre"], "relevance_score": 0.4, "file_url": "u2", "file_name": "b.pdf",
        "user_id": USER_ID, "created_at": "2024-06-11T10:00:00+00:00",
    })

    by_category = await submission_service.list_documents(USER_ID, "finanzas")
    by_keyword = await submission_service.list_documents(USER_ID, "masa madre")
    by_summary = await submission_service.list_documents(USER_ID, "CUENTAS")

    assert [d.title for d in by_category] == ["Informe anual"]
    assert [d.title for d in by_keyword] == ["Receta"]
    assert [d.title for d in by_summary] == ["Informe anual"]
    assert await submission_service.list_documents(USER_ID, "historia") == []
    assert len(await submission_service.list_documents(USER_ID, " ")) == 2
