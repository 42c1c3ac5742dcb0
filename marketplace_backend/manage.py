#!/usr/bin/env python
"""
PATH: manage.py

Management entrypoint for the marketplace backend.

Local runs default to backend.settings.dev. Deployments export
DJANGO_SETTINGS_MODULE=backend.settings.prod and that value is kept as-is.
"""

from __future__ import annotations

import os
import sys

DEFAULT_SETTINGS = "backend.settings.dev"


def _ensure_settings_module() -> None:
    current = (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip()
    # "backend.settings" is the package, not a loadable settings module
    if current in ("", "backend.settings"):
        os.environ["DJANGO_SETTINGS_MODULE"] = DEFAULT_SETTINGS


def main() -> None:
    _ensure_settings_module()
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
