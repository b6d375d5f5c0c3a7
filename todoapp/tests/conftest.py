from __future__ import annotations

import os
import tempfile

# Settings are read once at import time, so the environment must be in place
# before any todoapp module is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="todoapp-tests-")
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "app.log")
os.environ["JWT_SECRET"] = "test-secret-key-for-unit-tests-0123456789abcdef"
os.environ["JWT_ISSUER"] = "todoapp-tests"
