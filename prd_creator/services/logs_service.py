"""Log tail access for the get_logs tool."""

from __future__ import annotations

from pathlib import Path

from prd_creator.exceptions import NotFoundError, ValidationError


def get_logs(logs_dir: Path, file_name: str = "combined.log", lines: int = 100) -> str:
    """Return the last ``lines`` lines of a file inside ``logs_dir``."""
    # Prevent path traversal
    safe = Path(file_name)
    if safe.is_absolute() or ".." in safe.parts:
        raise ValidationError(f"Invalid log file name: {file_name}")

    full = logs_dir / safe
    try:
        full.resolve().relative_to(logs_dir.resolve())
    except ValueError:
        raise ValidationError(f"Invalid log file name: {file_name}")

    if not full.is_file():
        raise NotFoundError(f"Log file not found: {file_name}")

    all_lines = full.read_text(encoding="utf-8", errors="replace").splitlines()
    return "\n".join(all_lines[-lines:])
