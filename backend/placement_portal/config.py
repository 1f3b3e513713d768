from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "PlacementPortal"
    # Resumes: PDF/DOC/DOCX only, capped at 5 MiB.
    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_resume_extensions: tuple[str, ...] = (".pdf", ".doc", ".docx")
    jwt_secret_key: str = "dev-secret-change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    api_prefix: str = "/api"
    seed_sample_data: bool = True
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def db_path(self) -> Path:
        return self.data_path / "portal.sqlite"

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    @property
    def uploads_dir(self) -> Path:
        return self.data_path / "uploads"

    model_config = {"env_prefix": "PORTAL_"}


settings = Settings()
