from .pager import CatalogPager, LOAD_ERROR_MESSAGE

__all__ = ["CatalogPager", "LOAD_ERROR_MESSAGE"]
