"""ASGI entrypoint for the derender API."""

from derender.api.app import create_app
from derender.containers import build_container

app = create_app(build_container())
