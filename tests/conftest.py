"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at test-only settings before anything reads them.
"""

import os
import sys
from pathlib import Path

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Settings are read at import time, so these must be set first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MOONSHOT_API_KEY"] = "test-moonshot-key"
os.environ["AUTH_JWT_SECRET"] = "test-jwt-secret-0123456789abcdef0123"
os.environ["ESTIMATOR_MAX_ATTEMPTS"] = "1"
