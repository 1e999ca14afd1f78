import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORAGE_BACKEND = "json"
DATA_FILE = os.getenv("DATA_FILE", "instance/jurnal_guru_test.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "jurnal_guru_test"),
}

AUTO_INIT_DB = False

TEACHER_IDENTITY_POLICY = os.getenv("TEACHER_IDENTITY_POLICY", "auth_code")
PASSWORD_HASHER = "sha256"
ENABLE_DEMO_ACCOUNTS = True

SESSION_DAYS = 7

LOG_LEVEL = "WARNING"
LOG_FORMAT = "text"
