"""Root pytest configuration.

Test Structure:
    tests/
    ├── wms/                   # Core domain, application and API tests
    │   ├── unit/              # Fast, isolated tests (mocked repositories)
    │   └── integration/       # SQLite-backed persistence and HTTP tests
    ├── wms_auth/              # Token service tests
    └── shared/                # Shared fixtures and factories

Secrets required by ``Settings`` get test-safe defaults before any
application module reads them, and the database points at SQLite so that
importing the app never needs Postgres.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")

os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")
os.environ.setdefault("POSTGRES_PASSWORD", "test-password")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PASSWORD_BCRYPT_ROUNDS", "4")

from wms.domain.user import Password  # NOQA: E402
from wms_config import clear_settings_cache  # NOQA: E402

clear_settings_cache()

# Minimum bcrypt cost keeps hashing fast in tests
Password.set_default_rounds(4)

