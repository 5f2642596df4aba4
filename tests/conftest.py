"""Point the app at an in-memory SQLite database before anything imports larder."""

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("TOKEN_SWEEP_ENABLED", "false")
os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret-not-for-production")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret-not-for-production")
