from types import SimpleNamespace

import pytest

from knowledge_bank.services.storage.supabase_storage import SupabaseFileStorage

BUCKET = "documentos"


class FakeBucket:
    def __init__(self, name, fail=False):
        self.name = name
        self.fail = fail
        self.uploads = []

    def upload(self, path, file, file_options=None):
        if self.fail:
            raise RuntimeError("The resource already exists")
        self.uploads.append((path, file, file_options))
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://project.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self, fail=False, buckets=(BUCKET,)):
        self.fail = fail
        self.buckets = {}
        self.bucket_names = list(buckets)

    def from_(self, name):
        return self.buckets.setdefault(name, FakeBucket(name, self.fail))

    def list_buckets(self):
        return [SimpleNamespace(name=name) for name in self.bucket_names]


def storage_for(**kwargs):
    client = SimpleNamespace(storage=FakeStorage(**kwargs))
    return client, SupabaseFileStorage(client, BUCKET)


@pytest.mark.asyncio
async def test_upload_returns_public_url():
    client, storage = storage_for()

    url = await storage.upload("u1/1718000000000-report.pdf", b"%PDF", "application/pdf")

    assert url == f"https://project.supabase.co/storage/v1/object/public/{BUCKET}/u1/1718000000000-report.pdf"
    path, content, options = client.storage.buckets[BUCKET].uploads[0]
    assert path == "u1/1718000000000-report.pdf"
    assert content == b"%PDF"
    assert options == {"content-type": "application/pdf", "upsert": "false"}


@pytest.mark.asyncio
async def test_upload_without_content_type_uses_octet_stream():
    client, storage = storage_for()

    await storage.upload("u1/1-notes", b"raw", "")

    _, _, options = client.storage.buckets[BUCKET].uploads[0]
    assert options["content-type"] == "application/octet-stream"


@pytest.mark.asyncio
async def test_upload_failure_propagates():
    _, storage = storage_for(fail=True)

    with pytest.raises(RuntimeError, match="already exists"):
        await storage.upload("u1/1-report.pdf", b"%PDF", "application/pdf")


@pytest.mark.asyncio
async def test_get_public_url():
    _, storage = storage_for()

    assert (await storage.get_public_url("u1/a.txt")).endswith(f"/public/{BUCKET}/u1/a.txt")


@pytest.mark.asyncio
async def test_initialize_tolerates_missing_bucket():
    _, storage = storage_for(buckets=("other",))

    await storage.initialize()
