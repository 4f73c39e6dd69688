"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    board_file: Path = Field(
        default=Path("board.yml"),
        description="Path to the board.yml file seeding the board",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=warnings, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    announcement_delay: float = Field(
        default=1.0,
        gt=0,
        description="Seconds a live announcement stays mounted",
    )

    move_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds to wait for the persistence API to answer a move",
    )

    simulated_latency: float = Field(
        default=0.3,
        ge=0,
        description="Latency of the in-memory backend, in seconds",
    )

    failure_rate: float = Field(
        default=0.0,
        ge=0,
        le=1,
        description="Fraction of moves the in-memory backend rejects",
    )

    model_config = {
        "env_prefix": "TASKBOARD_",
    }
