from .base import BaseCatalogSource
from .vivino import VivinoScraper

__all__ = [
    "BaseCatalogSource",
    "VivinoScraper",
]
