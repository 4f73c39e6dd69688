"""Configuration service for loading board.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import BoardFile, BoardSnapshot

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching the board file."""

    def __init__(self, board_file: Path) -> None:
        """Initialize the config service.

        Args:
            board_file: Path to the board.yml file
        """
        self.board_file = board_file
        self._config: BoardFile | None = None
        self._config_error: str | None = None

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> BoardFile:
        """Get the board file, loading it if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_snapshot(self) -> BoardSnapshot:
        """Convenience method to build the initial board snapshot."""
        return self.get_config().to_snapshot()

    def _load_config(self) -> BoardFile:
        """Load the board file or return the default board."""
        name = self.board_file.name
        self._config_error = None

        if not self.board_file.exists():
            logger.debug("No %s found, using defaults", name)
            return BoardFile.default()

        try:
            with open(self.board_file) as f:
                data = yaml.safe_load(f)

            if data is None:
                self._config_error = f"{name} is empty"
                logger.warning(self._config_error)
                return BoardFile.default()

            config = BoardFile(**data)
            logger.info(
                "Loaded %s with %d columns and %d tasks",
                name,
                len(config.columns),
                len(config.tasks),
            )
            return config

        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {name}: {e}"
            logger.warning(self._config_error)
            return BoardFile.default()

        except (ValidationError, TypeError) as e:
            self._config_error = f"Error loading {name}: {e}"
            logger.warning(self._config_error)
            return BoardFile.default()
