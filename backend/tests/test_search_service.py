import pytest

from knowledge_bank.api.exceptions import SearchError
from knowledge_bank.services.ai_service import AIService
from knowledge_bank.services.database import MemoryAdapter
from knowledge_bank.services.search_service import SearchService

from conftest import StubProvider


def row(user_id, title, category="Tecnología", keywords=None, created_at="2024-05-01T10:00:00+00:00"):
    return {
        "title": title,
        "summary": f"Resumen de {title}",
        "category": category,
        "keywords": keywords or [],
        "relevance_score": 0.7,
        "file_url": f"https://example.test/{user_id}/{title}.pdf",
        "file_name": f"{title}.pdf",
        "user_id": user_id,
        "created_at": created_at,
    }


class BrokenSearchAdapter(MemoryAdapter):
    async def search_documents(self, keywords):
        raise RuntimeError("syntax error in tsquery")

    async def list_documents_by_owner(self, user_id):
        raise RuntimeError("timeout")

    async def list_documents_by_category(self, category):
        raise RuntimeError("timeout")

    async def list_categories(self):
        raise RuntimeError("timeout")


class BrokenProfilesAdapter(MemoryAdapter):
    async def get_profiles_by_ids(self, user_ids):
        raise RuntimeError("permission denied")

    async def find_profile_by_email(self, email):
        raise RuntimeError("permission denied")


def service_with(db, keywords=None, fail_keywords=False):
    provider = StubProvider(keywords=keywords, fail_keywords=fail_keywords)
    return SearchService(AIService(provider=provider), db), provider


@pytest.mark.asyncio
async def test_topic_keywords_merge_ai_and_literal_terms(db):
    service, _ = service_with(db, keywords=["aprendizaje", "IA", "machine learning"])

    keywords = await service.topic_keywords("machine learning en IA")

    assert keywords == ["aprendizaje", "IA", "machine learning", "machine", "learning"]


@pytest.mark.asyncio
async def test_topic_keywords_are_case_sensitive(db):
    service, _ = service_with(db, keywords=["Python"])
    assert await service.topic_keywords("python") == ["Python", "python"]


@pytest.mark.asyncio
async def test_topic_keywords_fall_back_to_split(db):
    service, _ = service_with(db, fail_keywords=True)
    assert await service.topic_keywords("deep learning") == ["deep", "learning"]


@pytest.mark.asyncio
async def test_search_by_topic_resolves_author_emails(db):
    await db.upsert_profile("u1", "ana@example.com")
    await db.insert_document(row("u1", "redes", keywords=["redes neuronales"]))
    await db.insert_document(row("ghost", "neuronas", keywords=["neuronas"]))
    await db.insert_document(row("u1", "cocina", category="Gastronomía", keywords=["recetas"]))
    service, _ = service_with(db, keywords=["neuronas", "redes neuronales"])

    results = await service.search_by_topic("redes")

    by_title = {doc.title: doc for doc in results}
    assert set(by_title) == {"redes", "neuronas"}
    assert by_title["redes"].author_email == "ana@example.com"
    assert by_title["neuronas"].author_email == "Unknown author"


@pytest.mark.asyncio
async def test_search_by_topic_blank_query_skips_ai(db):
    service, provider = service_with(db, keywords=["x"])

    assert await service.search_by_topic("   ") == []
    assert provider.topics == []


@pytest.mark.asyncio
async def test_search_by_topic_failure_raises_search_error():
    service, _ = service_with(BrokenSearchAdapter(), keywords=["redes"])

    with pytest.raises(SearchError) as exc_info:
        await service.search_by_topic("redes")

    assert str(exc_info.value) == "The keyword search failed."


@pytest.mark.asyncio
async def test_profile_lookup_failure_uses_unknown_author():
    db = BrokenProfilesAdapter()
    await db.insert_document(row("u1", "redes", keywords=["redes"]))
    service, _ = service_with(db, keywords=["redes"])

    [document] = await service.search_by_topic("redes")

    assert document.author_email == "Unknown author"


@pytest.mark.asyncio
async def test_search_by_author_uses_supplied_email(db):
    await db.upsert_profile("u1", "Ana@Example.com")
    await db.insert_document(row("u1", "antiguo", created_at="2024-01-01T00:00:00+00:00"))
    await db.insert_document(row("u1", "nuevo", created_at="2024-06-01T00:00:00+00:00"))
    await db.insert_document(row("u2", "ajeno"))
    service, _ = service_with(db)

    results = await service.search_by_author("  ana@example.com ")

    assert [doc.title for doc in results] == ["nuevo", "antiguo"]
    assert {doc.author_email for doc in results} == {"ana@example.com"}


@pytest.mark.asyncio
async def test_search_by_author_unknown_or_blank_email(db):
    await db.upsert_profile("u1", "ana@example.com")
    service, _ = service_with(db)

    assert await service.search_by_author("nobody@example.com") == []
    assert await service.search_by_author("   ") == []


@pytest.mark.asyncio
async def test_search_by_author_lookup_error_is_empty_result():
    service, _ = service_with(BrokenProfilesAdapter())
    assert await service.search_by_author("ana@example.com") == []


@pytest.mark.asyncio
async def test_search_by_author_documents_failure_raises():
    db = BrokenSearchAdapter()
    await db.upsert_profile("u1", "ana@example.com")
    service, _ = service_with(db)

    with pytest.raises(SearchError) as exc_info:
        await service.search_by_author("ana@example.com")

    assert str(exc_info.value) == "The author search failed."


@pytest.mark.asyncio
async def test_search_by_category_is_exact_and_newest_first(db):
    await db.upsert_profile("u1", "ana@example.com")
    await db.insert_document(row("u1", "viejo", created_at="2023-01-01T00:00:00+00:00"))
    await db.insert_document(row("u1", "reciente", created_at="2024-01-01T00:00:00+00:00"))
    await db.insert_document(row("u1", "otro", category="Tecnología aplicada"))
    service, _ = service_with(db)

    results = await service.search_by_category("Tecnología")

    assert [doc.title for doc in results] == ["reciente", "viejo"]
    assert results[0].author_email == "ana@example.com"


@pytest.mark.asyncio
async def test_search_by_category_failure_raises():
    service, _ = service_with(BrokenSearchAdapter())

    with pytest.raises(SearchError):
        await service.search_by_category("Arte")


@pytest.mark.asyncio
async def test_list_categories_distinct_in_first_seen_order(db):
    await db.insert_document(row("u1", "a", category="Historia"))
    await db.insert_document(row("u1", "b", category="Arte"))
    await db.insert_document(row("u2", "c", category="Historia"))
    await db.insert_document(row("u2", "d", category=""))
    service, _ = service_with(db)

    assert await service.list_categories() == ["Historia", "Arte"]


@pytest.mark.asyncio
async def test_list_categories_error_is_empty():
    service, _ = service_with(BrokenSearchAdapter())
    assert await service.list_categories() == []
