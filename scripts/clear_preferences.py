#!/usr/bin/env python3
"""Delete saved mentor search filter preferences."""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from mentor_search.config import get_client_settings
from mentor_search.session.preferences_store import FilterPreferencesStore


def clear_preferences():
    settings = get_client_settings()
    store = FilterPreferencesStore(
        store_name=settings.preferences.store_name,
        base_dir=settings.preferences.base_dir
    )

    if not store.clear():
        print('Error: could not delete saved filters')
        sys.exit(1)

    print(f'Cleared saved filters for {settings.preferences.store_name}')


if __name__ == '__main__':
    clear_preferences()
