"""
Supabase Storage adapter implementing FileStorageInterface.
Stores uploaded files in a public Supabase Storage bucket.
"""
import asyncio

from supabase import Client

from ...core.logging_config import get_logger
from .base import FileStorageInterface

logger = get_logger(__name__)


class SupabaseFileStorage(FileStorageInterface):
    """
    Supabase Storage adapter.
    Objects are never overwritten; keys carry a timestamp prefix.
    """

    def __init__(self, supabase: Client, bucket_name: str):
        """
        Initialize Supabase storage.

        Args:
            supabase: Shared Supabase client
            bucket_name: Supabase Storage bucket name
        """
        self.supabase = supabase
        self.bucket_name = bucket_name

    async def initialize(self):
        """Verify the bucket exists and is accessible."""
        def _list():
            return self.supabase.storage.list_buckets()

        loop = asyncio.get_event_loop()
        try:
            buckets = await loop.run_in_executor(None, _list)
        except Exception as e:
            logger.warning(f"Could not list Supabase Storage buckets: {e}")
            return

        bucket_names = [b.name for b in buckets]
        if self.bucket_name not in bucket_names:
            logger.warning(
                f"Supabase Storage bucket '{self.bucket_name}' not listed. "
                f"Available buckets: {bucket_names}"
            )

    async def close(self):
        """Close storage connection (no-op for Supabase, but included for interface)."""
        pass

    async def upload(self, file_path: str, content: bytes, content_type: str) -> str:
        """Upload bytes to Supabase Storage and return the public URL."""
        def _upload():
            self.supabase.storage.from_(self.bucket_name).upload(
                path=file_path,
                file=content,
                file_options={
                    "content-type": content_type or "application/octet-stream",
                    "upsert": "false",
                }
            )

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, _upload)
        logger.debug(f"Uploaded {len(content)} bytes to {self.bucket_name}/{file_path}")

        return await self.get_public_url(file_path)

    async def get_public_url(self, file_path: str) -> str:
        """Public URL of an object in the bucket."""
        def _public_url():
            return self.supabase.storage.from_(self.bucket_name).get_public_url(file_path)

        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, _public_url)
