"""ASGI entrypoint for the nutri tracker API."""

from nutri_tracker.api.app import create_app
from nutri_tracker.containers import build_container

app = create_app(build_container())
