# backend/settings/__init__.py
"""
Settings package. Nothing is imported here; pick a module explicitly:

- backend.settings.dev   local runs and the test suite
- backend.settings.prod  deployments (fail-closed configuration)
"""
