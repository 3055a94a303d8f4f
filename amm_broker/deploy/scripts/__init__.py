"""Deployment scripts; importing this package registers them"""

from . import store  # noqa: F401
