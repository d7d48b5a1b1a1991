import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Data directory is at backend/data
DATA_DIR = os.getenv(
    "DATA_DIR",
    os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), 'data'),
)
LAST_SEARCH_FILE = os.path.join(DATA_DIR, 'last_search.json')


def _load_json(file_path: str) -> Dict[str, Any]:
    """Load JSON file, return empty dict if not exists"""
    if os.path.exists(file_path):
        with open(file_path, 'r') as f:
            return json.load(f)
    return {}


def _save_json(file_path: str, data: Dict[str, Any]) -> None:
    """Save data to JSON file"""
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    with open(file_path, 'w') as f:
        json.dump(data, f, indent=2)


def save_last_search(trip: Dict[str, Any], file_path: str = None) -> Dict[str, Any]:
    """Remember the most recent trip searched (overwrites the previous one)"""
    record = {
        'trip': trip,
        'searched_at': datetime.now(timezone.utc).isoformat(),
    }
    _save_json(file_path or LAST_SEARCH_FILE, record)
    return record


def get_last_search(file_path: str = None) -> Optional[Dict[str, Any]]:
    """Get the most recent trip searched, or None"""
    record = _load_json(file_path or LAST_SEARCH_FILE)
    return record or None
