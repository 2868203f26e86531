"""
ASGI Entrypoint for Household Finance Tracker

Run with:
    uvicorn app.main:app --port 3001
or:
    python -m app.main

Firebase is initialized once here, at import time of the ASGI app,
from whichever credential source is found first.
"""

import uvicorn

from finance_tracker.api import create_app
from finance_tracker.config import get_settings


app = create_app()


if __name__ == "__main__":
    settings = get_settings().app
    uvicorn.run(app, host=settings.host, port=settings.port)
