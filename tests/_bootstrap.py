"""Test helper that normalizes sys.path and environment defaults."""

from __future__ import annotations

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


_DEFAULT_ENV_VARS: dict[str, str] = {
    "BROKER_CLIENT_ID": "test-client-id",
    "BROKER_CLIENT_SECRET": "test-client-secret",
    "FCM_EXPECTED_PROJECT_NUMBER": "123456",
    "FCM_SERVICE_ACCOUNT_FILE": str(FIXTURES_DIR / "service-account.json"),
    "ACCESS_TOKEN_TTL_SECONDS": "3600",
}

for key, value in _DEFAULT_ENV_VARS.items():
    os.environ.setdefault(key, value)
