# tubely/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8091
    prefix: str = "/api"
    # Base used to build locators for assets served by this API (memory backend)
    public_base_url: Optional[str] = None

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @computed_field  # type: ignore[misc]
    @property
    def base_url(self) -> str:
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        return f"http://localhost:{self.port}"


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "tubely"
    user: str = "tubely"
    password: str = "tubely"
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    # Optional single URL (if set, it takes precedence)
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url", "url"),
    )

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class FFProbeConfig(BaseModel):
    timeout_sec: int = 30
    log_level: str = "error"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace
    bin: str = Field(default="ffprobe", validation_alias=AliasChoices("FFPROBE_BIN", "bin"))


class S3Config(BaseModel):
    bucket: str = "tubely-media"
    region: str = "eu-central-1"
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    # CDN / MinIO style base; overrides the virtual-hosted AWS URL when set
    public_base_url: Optional[str] = None


class UploadLimits(BaseModel):
    max_video_bytes: int = Field(1 << 30, ge=1)  # 1 GiB
    max_thumbnail_bytes: int = Field(10 << 20, ge=1)  # 10 MiB
    video_media_type: str = "video/mp4"
    video_ext: str = "mp4"
    thumbnail_type_prefix: str = "image/"
    chunk_size: int = Field(1 << 20, ge=1024)
    fsync: bool = True
    # multipart boundaries and part headers on top of the file itself
    multipart_overhead_bytes: int = Field(16 << 10, ge=0)

    @field_validator("fsync", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "tubely"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Paths & layout --------
    data_root: Path = Path("./.tubely")
    temp_subdir: str = "tmp"
    temp_root_override: Optional[Path] = Field(default=None, alias="TEMP_ROOT")

    # -------- Storage --------
    storage_backend: Literal["s3", "memory"] = "s3"

    # -------- Security --------
    jwt_secret: str = "dev-only-secret"
    jwt_algo: str = "HS256"
    jwt_issuer: str = "tubely-access"
    jwt_expires_sec: int = 3600

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    ffprobe: FFProbeConfig = FFProbeConfig()
    s3: S3Config = S3Config()
    uploads: UploadLimits = UploadLimits()


    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # ===== Derived paths =====
    @computed_field  # type: ignore[misc]
    @property
    def temp_root(self) -> Path:
        if self.temp_root_override:
            return Path(self.temp_root_override)
        return self.data_root / self.temp_subdir

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.db.effective_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from tubely.common.settings import get_settings
        cfg = get_settings()
    """
    s = Settings()  # pydantic_settings will read from .env automatically
    if s.app_env in ("development", "test"):
        for p in (s.data_root, s.temp_root):
            p.mkdir(parents=True, exist_ok=True)
    return s
