import os
from pathlib import Path

from pydantic_settings import BaseSettings

SAMPLE_POPULATION = Path(__file__).parent / "data" / "sample_population.json"


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    rate_limit: str = "60/minute"
    rate_limit_enabled: bool = True

    # Cache
    cache_backend: str = "memory"  # "memory" | "redis"
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout_seconds: float = 5.0
    recommendation_ttl_seconds: int = 86400  # daily refresh
    gap_ttl_seconds: int = 3600
    prediction_ttl_seconds: int = 604800  # 7 days

    # Population scans
    similarity_scan_limit: int = 1000
    similarity_scan_timeout_seconds: float | None = 5.0
    scan_max_concurrency: int = 50
    peer_count: int = 5  # peers feeding skill recommendations
    career_peer_count: int = 20  # peers feeding career prediction
    transition_scan_limit: int = 5000
    transition_scan_timeout_seconds: float | None = 5.0

    # In-memory stores are seeded from this snapshot
    seed_data_path: str = str(SAMPLE_POPULATION)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
