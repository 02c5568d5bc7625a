import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

STORE_CONFIG = {
    "url": os.getenv("SUPABASE_URL", "http://localhost:54321"),
    "api_key": os.getenv("SUPABASE_KEY", ""),
    "bucket": os.getenv("STORAGE_BUCKET", "visit-photos"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "15")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Existing rows in the users table may still hold plaintext passwords
LEGACY_PLAINTEXT_PASSWORDS = bool(int(os.getenv("LEGACY_PLAINTEXT_PASSWORDS", "1")))
