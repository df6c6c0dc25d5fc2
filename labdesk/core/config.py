from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str

    # If DEV and you hit SSL cert issues on Windows, set DB_SSL_VERIFY=false in .env
    DB_SSL_VERIFY: bool = True

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    SUPER_ADMIN_EMAIL: str | None = None
    SUPER_ADMIN_PASSWORD: str | None = None
    SUPER_ADMIN_NAME: str | None = "Lab Administrator"
    ENV: str = "dev"  # "dev" or "prod"

    CORS_ORIGINS: list[str] = ["http://localhost:5173", "*"]

    # --- SCHEDULED JOBS ---
    JOB_SECRET: str | None = None
    ISSUE_RETENTION_MINUTES: int = 30

    # --- BOOKINGS ---
    # allow | warn | reject
    BOOKING_OVERLAP_POLICY: str = "allow"

    # --- REMINDER WINDOWS ---
    BOOKING_REMINDER_HOURS: int = 24
    LICENSE_REMINDER_DAYS: int = 30
    MAINTENANCE_INTERVAL_DAYS: int = 30

    # --- RATE LIMITING ---
    REDIS_URL: str | None = None
    RATE_LIMIT_ENABLED: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
