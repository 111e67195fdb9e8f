"""Global pytest configuration."""

import os

# Settings are built at import time, so these must exist before app imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("GOOGLE_API_KEY", "")
os.environ.setdefault("REDIS_URL", "")
