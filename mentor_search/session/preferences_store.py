"""
Filter preference persistence for the mentor search client.

Only the serialized search filters survive between runs; results, cursors
and sessions are always fetched fresh. The controller never writes here on
its own: callers export filters and hand them to this store.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from datetime import datetime


logger = logging.getLogger(__name__)


class FilterPreferencesStore:
    """Saves and loads mentor search filters as a JSON file.

    Storage failures are logged and reported through return values so the
    client keeps working with in-memory filters.

    Attributes:
        store_name: File stem the preferences are stored under
        base_dir: Directory holding the preference file
    """

    def __init__(
        self,
        store_name: str = "mentorship_store",
        base_dir: str = "./client_preferences"
    ):
        self.store_name = store_name
        self.base_dir = Path(base_dir)

    def _get_store_file_path(self) -> Path:
        return self.base_dir / f"{self.store_name}.json"

    def load_filters(self) -> Optional[Dict[str, Any]]:
        """Load previously saved filters.

        Returns:
            The serialized filters, or None if nothing usable is stored
        """
        store_file = self._get_store_file_path()

        if not store_file.exists():
            logger.info(f"No saved filter preferences at {store_file}")
            return None

        try:
            with open(store_file, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse preferences JSON from {store_file}: {e}")
            return None
        except OSError as e:
            logger.error(f"Failed to read preferences file {store_file}: {e}")
            return None

        filters = data.get("searchFilters") if isinstance(data, dict) else None
        if not isinstance(filters, dict):
            logger.warning(f"Preferences file {store_file} has no searchFilters entry")
            return None

        logger.info(f"Loaded filter preferences from {store_file}")
        return filters

    def save_filters(self, filters: Dict[str, Any]) -> bool:
        """Persist serialized filters.

        Args:
            filters: Output of MentorSearchController.export_filters()

        Returns:
            True if save was successful, False otherwise
        """
        store_file = self._get_store_file_path()
        state = {
            "searchFilters": filters,
            "savedAt": datetime.now().isoformat(),
        }

        try:
            content = json.dumps(state, indent=2)
        except TypeError as e:
            logger.error(f"Failed to serialize filter preferences to JSON: {e}")
            return False

        try:
            store_file.parent.mkdir(parents=True, exist_ok=True)
            with open(store_file, 'w') as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write preferences file {store_file}: {e}")
            return False

        logger.info(f"Saved filter preferences to {store_file}")
        return True

    def clear(self) -> bool:
        """Delete stored preferences. Returns False if deletion failed."""
        store_file = self._get_store_file_path()
        try:
            store_file.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to delete preferences file {store_file}: {e}")
            return False
        return True
