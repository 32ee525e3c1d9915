"""HUDS dining API client."""

from huds_backend.infrastructure.external_apis.huds.client import HUDSApiClient

__all__ = ["HUDSApiClient"]
