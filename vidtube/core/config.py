from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # SQLite by default, any SQLAlchemy URL works.
    DATABASE_URL: str = "sqlite:///./vidtube.db"

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"  # comma-separated; "*" disables credentials

    # --- Media store ---
    MEDIA_BACKEND: str = "local"  # local | cloudinary

    # local backend
    MEDIA_ROOT: str = "./media"
    MEDIA_URL_PREFIX: str = "/media"

    # cloudinary backend
    CLOUDINARY_CLOUD_NAME: str | None = None
    CLOUDINARY_API_KEY: str | None = None
    CLOUDINARY_API_SECRET: str | None = None
    CLOUDINARY_LARGE_UPLOAD_MB: int = 100  # chunked upload above this
    CLOUDINARY_CHUNK_MB: int = 20
    CLOUDINARY_TIMEOUT: float = 120.0

    # --- Uploads ---
    UPLOAD_TEMP_DIR: str = "./public/temp"
    MAX_UPLOAD_MB: int = 200

    # --- Pagination ---
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
