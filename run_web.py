#!/usr/bin/env python3
"""
Run the resume submission API.
"""

import os
import sys


def _check_production_settings() -> None:
    """Fail fast on production launch misconfiguration."""
    from config.settings import get_settings

    settings = get_settings()
    if not settings.is_production:
        return

    errors = settings.validate_production_security()
    if errors:
        for error in errors:
            print(f"[PREFLIGHT] {error}", file=sys.stderr)
        raise SystemExit(1)


def main() -> None:
    # Make src importable
    repo_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, os.path.join(repo_root, "src"))
    _check_production_settings()

    import uvicorn

    uvicorn.run(
        "web.app:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("APP_ENVIRONMENT", "development").lower() == "development",
    )


if __name__ == "__main__":
    main()
