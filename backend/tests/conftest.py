import os

# Must be set before assetdesk.core.config builds its settings singleton
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("APP_ENV", "test")
