"""ASGI entrypoint for the tea tracker API."""

from tea_tracker.api.app import create_app
from tea_tracker.containers import build_container

app = create_app(build_container())
