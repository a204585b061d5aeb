import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Supabase (auth, storage and Postgres)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
SUPABASE_STORAGE_BUCKET = os.getenv("SUPABASE_STORAGE_BUCKET", "documentos")
DOCUMENTS_TABLE = os.getenv("DOCUMENTS_TABLE", "documents")
PROFILES_TABLE = os.getenv("PROFILES_TABLE", "profiles")

# Full-text search configuration of the documents.fts column
FTS_COLUMN = os.getenv("FTS_COLUMN", "fts")
FTS_CONFIG = os.getenv("FTS_CONFIG", "spanish")

# Adapter selection. Options: 'supabase', 'memory'
DATABASE_TYPE = os.getenv("DATABASE_TYPE", "supabase")
STORAGE_TYPE = os.getenv("STORAGE_TYPE", "supabase")
AUTH_TYPE = os.getenv("AUTH_TYPE", "supabase")

# AI providers. Options: 'openrouter', 'anthropic', 'mock'
AI_PROVIDER = os.getenv("AI_PROVIDER", "openrouter")
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "google/gemini-2.5-flash")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-5-haiku-latest")

# Language the AI must answer in; should match FTS_CONFIG
ANALYSIS_LANGUAGE = os.getenv("ANALYSIS_LANGUAGE", "Spanish")

# Submission limits
UPLOAD_LIMIT_PER_DAY = int(os.getenv("UPLOAD_LIMIT_PER_DAY", "5"))
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "5"))
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
SUPPORTED_DOCUMENT_TYPES = ["application/pdf", "text/plain", "text/markdown"]

# Label shown when a document owner cannot be resolved
UNKNOWN_AUTHOR = os.getenv("UNKNOWN_AUTHOR", "Unknown author")

# OAuth
OAUTH_REDIRECT_URL = os.getenv("OAUTH_REDIRECT_URL")

# Rate Limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "30"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")


def validate_config() -> None:
    """
    Fail fast when a Supabase-backed adapter is selected without credentials.

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_KEY is missing
    """
    from ..api.exceptions import ConfigurationError

    uses_supabase = "supabase" in (
        DATABASE_TYPE.lower(),
        STORAGE_TYPE.lower(),
        AUTH_TYPE.lower(),
    )
    if uses_supabase and not (SUPABASE_URL and SUPABASE_KEY):
        raise ConfigurationError(
            "Supabase URL and key are not configured. "
            "Set SUPABASE_URL and SUPABASE_KEY in the environment or .env file."
        )
