"""ASGI entrypoint for the baggage check API."""

from baggage_check.api.app import create_app
from baggage_check.config import Settings
from baggage_check.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
