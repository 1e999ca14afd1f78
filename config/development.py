import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# "json": satu file dokumen (registeredUsers + authCodes); "mysql": DB_CONFIG
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
DATA_FILE = os.getenv("DATA_FILE", "instance/jurnal_guru.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "jurnal_guru"),
}

# If enabled (mysql backend), app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# "auth_code" (kode dari admin) atau "nip" (18 digit)
TEACHER_IDENTITY_POLICY = os.getenv("TEACHER_IDENTITY_POLICY", "auth_code")
PASSWORD_HASHER = os.getenv("PASSWORD_HASHER", "sha256")
ENABLE_DEMO_ACCOUNTS = bool(int(os.getenv("ENABLE_DEMO_ACCOUNTS", "1")))

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")
