from .addon import AddonUseCase
from .catalog_search import CatalogSearchUseCase

__all__ = ["AddonUseCase", "CatalogSearchUseCase"]
