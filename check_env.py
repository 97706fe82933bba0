#!/usr/bin/env python3
"""Helper script to check (and template) the .env file holding upstream API keys."""

from pathlib import Path
import os
import sys

TEMPLATE = """# OpenRouteService (geocoding, matrix, optimization)
# Get a key from: https://openrouteservice.org/dev/#/signup
ROUTEPLANNER_ORS_API_KEY=your-ors-key-here

# Google Places (brand-aware nearby search)
ROUTEPLANNER_GOOGLE_PLACES_API_KEY=your-google-places-key-here

# Optional overrides
# ROUTEPLANNER_API_PREFIX=/api
# ROUTEPLANNER_LOG_LEVEL=INFO
# ROUTEPLANNER_FRONTEND_ALLOWED_ORIGINS=["http://localhost:3000","http://127.0.0.1:3000"]
"""


def _mask(value: str) -> str:
    if len(value) > 12:
        return value[:6] + "..." + value[-4:]
    return "***"


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Route Planner Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"No .env file at {env_file}; writing a template.")
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print("Edit .env and add your API keys, then rerun this script.")
        return

    print(f"Found .env file at: {env_file}")
    print()

    sys.path.insert(0, str(project_root / "src"))
    try:
        from routeplanner.config import Settings
        from routeplanner.exceptions import MissingCredentialError
    except ImportError as e:
        print(f"Error importing configuration: {e}")
        print("Run this script from the project root directory.")
        return

    loaded = Settings()
    for name, value in (
        ("ROUTEPLANNER_ORS_API_KEY", loaded.ors_api_key),
        ("ROUTEPLANNER_GOOGLE_PLACES_API_KEY", loaded.google_places_api_key),
    ):
        source = "environment" if os.getenv(name) else ".env"
        if value:
            print(f"OK      {name} ({source}): {_mask(value)}")
        else:
            print(f"MISSING {name}")
    print()

    try:
        loaded.require_credentials()
    except MissingCredentialError as e:
        print(f"Not ready: {e.note}")
        return
    print("All required keys are configured.")


if __name__ == "__main__":
    main()
