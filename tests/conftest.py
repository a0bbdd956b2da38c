"""Test-wide environment: cheap bcrypt cost so API tests that register users stay fast."""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH_ENABLED", "false")
