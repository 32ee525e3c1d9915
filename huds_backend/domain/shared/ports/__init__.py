"""Domain ports (interfaces implemented by infrastructure)."""

from huds_backend.domain.shared.ports.menu_repository import IMenuRepository

__all__ = ["IMenuRepository"]
