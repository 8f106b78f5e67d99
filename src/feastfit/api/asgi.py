"""ASGI entrypoint for the FeastFit API."""

from feastfit.api.app import create_app
from feastfit.containers import build_container

app = create_app(build_container())
