import os

SECRET_KEY = "test-secret"

STORE_CONFIG = {
    "url": os.getenv("SUPABASE_URL", "http://store.test"),
    "api_key": "test-key",
    "bucket": "visit-photos",
    "timeout": 5.0,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

LEGACY_PLAINTEXT_PASSWORDS = True
