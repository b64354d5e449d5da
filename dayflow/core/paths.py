"""
Path utility module
Resolves the data directory, database file and export locations
"""

from pathlib import Path
from typing import Optional

from dayflow.config.loader import get_config
from dayflow.core.logger import get_logger

logger = get_logger(__name__)


def ensure_dir(dir_path: Path) -> Path:
    """
    Ensure directory exists, create if it doesn't

    Args:
        dir_path: Directory path

    Returns:
        Directory path
    """
    dir_path = Path(dir_path)
    if not dir_path.exists():
        dir_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created directory: {dir_path}")
    return dir_path


def get_data_dir(subdir: Optional[str] = None) -> Path:
    """
    Get data directory (databases, logs, exports)

    The data directory is the directory holding the active configuration file,
    so a DAYFLOW_CONFIG override relocates all runtime files together.

    Args:
        subdir: Optional subdirectory name

    Returns:
        Data directory path
    """
    data_dir = Path(get_config().config_file).expanduser().parent
    if subdir:
        data_dir = data_dir / subdir
    return ensure_dir(data_dir)


def get_db_path(db_name: str = "dayflow.db") -> Path:
    """
    Get database file path

    `database.path` from the configuration wins over the data directory default.
    """
    configured = get_config().get("database.path")
    if configured:
        path = Path(configured).expanduser()
        ensure_dir(path.parent)
        return path
    return get_data_dir() / db_name


def get_exports_dir() -> Path:
    """Get exports directory"""
    return get_data_dir("exports")
