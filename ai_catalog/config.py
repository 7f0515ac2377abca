"""Project configuration and paths."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Project structure
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("CATALOG_DATA_DIR", str(PROJECT_ROOT / "data")))
STATIC_DIR = Path(__file__).parent / "static"

# Dataset file names, relative to DATA_DIR or DATA_URL
TOOLS_FILE = "tools.json"
LEARNING_FILE = "learning.json"
MCP_SERVERS_FILE = "mcp-servers.json"

# Remote base URL; when set, datasets are fetched over HTTP instead of read from DATA_DIR
DATA_URL = os.getenv("CATALOG_DATA_URL", "").rstrip("/")

# Base path for subdirectory deployment
BASE_PATH = os.getenv("BASE_PATH", "").rstrip("/")

WEB_PORT = int(os.getenv("WEB_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("CATALOG_LOG_DIR", "logs"))


def save_dir() -> Optional[Path]:
    """Directory the admin editor writes collections to, if direct saving is enabled."""
    value = os.getenv("CATALOG_SAVE_DIR")
    if not value:
        return None
    return Path(value)
