"""ASGI entrypoint for the NutriMind API."""

from nutrimind.api.app import create_app
from nutrimind.containers import build_container

app = create_app(build_container())
