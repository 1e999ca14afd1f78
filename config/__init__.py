import os

def get_settings_module() -> str:
    # APP_ENV menentukan modul setting, default "development"
    env = os.getenv("APP_ENV", "development").lower()

    # 1. Production
    if env in {"prod", "production"}:
        return "config.production"

    # 2. Testing
    if env in {"test", "testing"}:
        return "config.testing"

    # 3. Selain itu selalu Development
    return "config.development"
