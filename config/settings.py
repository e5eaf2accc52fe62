import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class Settings:
    # Application Info
    APP_NAME: str = "Freelinkd Kuesioner API"
    VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "True").lower() == "true"

    # Server Configuration
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", 5001))

    # CORS and Security
    CORS_ORIGINS: list = ["*"]
    SECRET_KEY: str = os.getenv("SECRET_KEY", "secret_key")

    # Environment
    ENVIRONMENT: str = os.getenv("APP_ENV", os.getenv("ENVIRONMENT", "development"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Storage backend: "mongo" or "astra"
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "mongo").lower()

    # MongoDB
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB_NAME: str = os.getenv("MONGODB_DB_NAME", "freelinkd-db")

    # Astra DB (Data API)
    ASTRA_DB_API_ENDPOINT: str = os.getenv("ASTRA_DB_API_ENDPOINT", "")
    ASTRA_DB_APPLICATION_TOKEN: str = os.getenv("ASTRA_DB_APPLICATION_TOKEN", "")
    ASTRA_DB_KEYSPACE: str = os.getenv("ASTRA_DB_KEYSPACE", "default_keyspace")

    # Collection Names
    FORMS_COLLECTION: str = os.getenv("FORMS_COLLECTION", "kuesioner")
    USERS_COLLECTION: str = os.getenv("USERS_COLLECTION", "users")

    # Connection lifecycle
    DB_MAX_RETRIES: int = int(os.getenv("DB_MAX_RETRIES", 3))
    DB_RETRY_BASE_DELAY: float = float(os.getenv("DB_RETRY_BASE_DELAY", 1.0))
    DB_RETRY_MAX_DELAY: float = 5.0
    DB_PAGE_SIZE: int = int(os.getenv("DB_PAGE_SIZE", 20))

    # Timeouts (seconds)
    INSERT_TIMEOUT_SECONDS: float = float(os.getenv("INSERT_TIMEOUT_SECONDS", 10))
    SUBMIT_TIMEOUT_SECONDS: float = float(os.getenv("SUBMIT_TIMEOUT_SECONDS", 25))

    # Wizard sessions
    SESSION_TIMEOUT_HOURS: int = int(os.getenv("SESSION_TIMEOUT_HOURS", 24))

    # Admin dashboard cache
    DASHBOARD_CACHE_TTL: int = int(os.getenv("DASHBOARD_CACHE_TTL", 30))

    # Timezone used for the "Tanggal Submit" column of the CSV export
    EXPORT_TIMEZONE: str = os.getenv("EXPORT_TIMEZONE", "Asia/Jakarta")

    def validate(self):
        """Validate settings that must be set outside development"""
        if self.STORAGE_BACKEND not in ("mongo", "astra"):
            raise ValueError(f"Unknown STORAGE_BACKEND '{self.STORAGE_BACKEND}', expected 'mongo' or 'astra'")

        if self.is_production():
            if self.SECRET_KEY == "secret_key":
                raise ValueError("Please set a secure SECRET_KEY for production!")

            if self.STORAGE_BACKEND == "astra" and not (self.ASTRA_DB_API_ENDPOINT and self.ASTRA_DB_APPLICATION_TOKEN):
                raise ValueError("ASTRA_DB_API_ENDPOINT and ASTRA_DB_APPLICATION_TOKEN are required for production!")

    def get_mongodb_config(self) -> dict:
        """Get MongoDB configuration as dictionary"""
        return {
            "uri": self.MONGODB_URI,
            "database": self.MONGODB_DB_NAME,
            "collections": {
                "forms": self.FORMS_COLLECTION,
                "users": self.USERS_COLLECTION
            }
        }

    def get_astra_config(self) -> dict:
        """Get Astra Data API configuration as dictionary"""
        return {
            "endpoint": self.ASTRA_DB_API_ENDPOINT.rstrip("/"),
            "token": self.ASTRA_DB_APPLICATION_TOKEN,
            "keyspace": self.ASTRA_DB_KEYSPACE
        }

    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.ENVIRONMENT.lower() == "production"

    def redacted_mongodb_uri(self) -> str:
        return self.MONGODB_URI.split('@')[-1] if '@' in self.MONGODB_URI else self.MONGODB_URI

    def print_config_summary(self):
        """Log configuration summary (safe for logging)"""
        logger.info(f"""
🔧 Configuration Summary:
   App: {self.APP_NAME} v{self.VERSION}
   Environment: {self.ENVIRONMENT}
   Host: {self.HOST}:{self.PORT}
   Debug: {self.DEBUG}

   Storage: {self.STORAGE_BACKEND}
   MongoDB: {self.redacted_mongodb_uri()} / {self.MONGODB_DB_NAME}
   Astra: {'✅ Configured' if self.ASTRA_DB_API_ENDPOINT and self.ASTRA_DB_APPLICATION_TOKEN else '❌ Not configured'}

   Collections: forms={self.FORMS_COLLECTION}, users={self.USERS_COLLECTION}
   Insert timeout: {self.INSERT_TIMEOUT_SECONDS}s
""")


# Create global settings instance
settings = Settings()
