from .viewer import CatalogView, ViewerSession

__all__ = ["CatalogView", "ViewerSession"]
