"""Quiz-related constants shared across the engine and the web bridge."""

from pathlib import Path

TOP_MATCH_LIMIT: int = 3
STAR_SWIPE_MULTIPLIER: float = 1.2
MAX_ACTIVE_SESSIONS: int = 256
DEFAULT_CATALOG_PATH: Path = Path(__file__).resolve().parent.parent / "data" / "default_catalog.json"
