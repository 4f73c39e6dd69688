"""Generate command for creating a default board file."""

import logging
from pathlib import Path

import yaml

from ..models import BoardFile
from .output import error, info, success

logger = logging.getLogger(__name__)

# Header comments for generated file
BOARD_HEADER = """\
# taskboard Board File
#
# board_id: Identifier passed to the persistence API
#
# Columns:
#   - Listed in display order (the order is the column sort order)
#   - Column IDs must be lowercase, letters/digits with _ or -
#   - color: Named color (blue, red, etc.) or hex (#ff0000)
#
# Tasks:
#   - Listed in position order within their column
#   - column: ID of the owning column
#   - priority: low, medium, high, urgent
#   - status: active, completed, archived
#   - Optional: description, ticket_key, due_date (YYYY-MM-DD), assignee,
#     estimated_hours, actual_hours

"""


def generate_board_yaml() -> str:
    """Generate YAML from the default BoardFile model.

    Uses BoardFile.default() as the single source of truth, so the generated
    file always matches the built-in board.
    """
    board = BoardFile.default()
    board_dict = board.model_dump(mode="json", exclude_none=True)

    # Drop fields still at their defaults to keep the file short
    for task in board_dict.get("tasks", []):
        if task.get("priority") == "medium":
            del task["priority"]
        if task.get("status") == "active":
            del task["status"]

    yaml_content = yaml.dump(board_dict, default_flow_style=False, sort_keys=False)
    return BOARD_HEADER + yaml_content


def run_generate(board_file: Path) -> int:
    """
    Write the default board file.

    Args:
        board_file: Path where board.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do or failure)
    """
    if board_file.exists():
        info(f"Board file exists: {board_file}")
        print("Nothing to generate.")
        return 1

    try:
        board_file.parent.mkdir(parents=True, exist_ok=True)
        board_file.write_text(generate_board_yaml())
    except OSError as e:
        logger.warning("Failed to write %s: %s", board_file, e)
        error(f"Could not write {board_file}: {e}")
        return 1

    success(f"Generated board file: {board_file}")
    return 0
