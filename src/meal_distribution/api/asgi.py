"""ASGI entrypoint for the meal distribution API."""

from meal_distribution.api.app import create_app
from meal_distribution.containers import build_container

app = create_app(build_container())
