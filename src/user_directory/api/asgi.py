"""ASGI entrypoint for the user directory API."""

from user_directory.api.app import create_app
from user_directory.containers import build_container

app = create_app(build_container())
