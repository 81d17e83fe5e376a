"""Centralised settings for taskgraph.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

BACKENDS = ("sqlite", "json")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("TASKGRAPH_WORKSPACE", Path.cwd())
        )
    )
    backend: str = field(
        default_factory=lambda: os.environ.get("TASKGRAPH_BACKEND", "sqlite")
    )

    @property
    def db_path(self) -> Path:
        """Absolute path to the SQLite database file."""
        return self.workspace_dir / "graph.sqlite3"

    @property
    def snapshot_path(self) -> Path:
        """Absolute path to the JSON snapshot file."""
        return self.workspace_dir / "graph.json"

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    match_threshold: int = field(
        default_factory=lambda: int(os.environ.get("TASKGRAPH_MATCH_THRESHOLD", "5"))
    )

    # ------------------------------------------------------------------
    # CLI
    # ------------------------------------------------------------------
    editor: Optional[str] = field(
        default_factory=lambda: os.environ.get("TASKGRAPH_EDITOR") or None
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("TASKGRAPH_LOG_LEVEL", "WARNING")
    )

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this everywhere:
#   from taskgraph.config import settings
settings = Settings()
