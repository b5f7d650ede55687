import os


def _env(name: str, default: str) -> str:
    return os.getenv(f"COURTDESK_{name}", default)


class Settings:
    def __init__(self):
        self.app_name = "CourtDesk"
        self.api_version = "1.0.0"
        self.environment = _env("ENVIRONMENT", "development")
        self.secret_key = _env("SECRET_KEY", "CHANGE_ME")
        self.access_token_expire_minutes = int(_env("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
        database_url = _env("DATABASE_URL", "sqlite:///./courtdesk.db")
        if database_url.startswith("postgres://"):
            database_url = database_url.replace("postgres://", "postgresql://", 1)
        self.database_url = database_url
        self.log_level = _env("LOG_LEVEL", "INFO").upper()
        self.cors_origins = [
            origin.strip()
            for origin in _env("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
            if origin.strip()
        ]
        self.upload_dir = _env("UPLOAD_DIR", "./uploads")
        self.upload_url_prefix = _env("UPLOAD_URL_PREFIX", "/uploads").rstrip("/")
        self.max_avatar_bytes = 5 * 1024 * 1024
        self.max_document_bytes = 10 * 1024 * 1024
        self.whatsapp_country_code = _env("WHATSAPP_COUNTRY_CODE", "55")
        self.currency_symbol = _env("CURRENCY_SYMBOL", "R$")
        self.invoice_due_day = int(_env("INVOICE_DUE_DAY", "10"))


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
