"""ASGI entrypoint for the bakery API."""

from bakery_ops.api.app import create_app
from bakery_ops.containers import build_container

app = create_app(build_container())
