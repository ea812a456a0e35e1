"""Root conftest: test configuration applied before charity settings are loaded."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789abcdef")
os.environ.setdefault("JWT_EXPIRE_MINUTES", "60")
# Cheap hashes keep the suite fast; production default is 12.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
