"""WelwExpress FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay in domain.toml (memory by default).
from marketplace.domain import marketplace
from marketplace.web import create_app

marketplace.init()

app = create_app()
