from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_files() -> list[str]:
    """Load .env from backend root (when running from services/media) then local .env."""
    base = Path(__file__).resolve().parent.parent.parent.parent  # backend root
    return [str(base / ".env"), ".env"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── AWS ───────────────────────────────────────────────────────────────────
    # Empty credentials fall through to the default chain (Lambda role).
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "ap-south-1"

    # MediaConvert — used when the custom resource carries no EndPoint
    mediaconvert_endpoint: str = ""

    # ── Custom resource ───────────────────────────────────────────────────────
    log_level: str = "INFO"
    callback_timeout_secs: int = 10  # CloudFormation response PUT
