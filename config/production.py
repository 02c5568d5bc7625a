import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_CONFIG = {
    "url": os.getenv("SUPABASE_URL", ""),
    "api_key": os.getenv("SUPABASE_KEY", ""),
    "bucket": os.getenv("STORAGE_BUCKET", "visit-photos"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "15")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LEGACY_PLAINTEXT_PASSWORDS = bool(int(os.getenv("LEGACY_PLAINTEXT_PASSWORDS", "0")))
