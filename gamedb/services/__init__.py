from .catalog import CatalogRepository

__all__ = ["CatalogRepository"]
