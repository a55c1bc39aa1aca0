from .catalog import TeleboxCatalogUseCase

__all__ = ["TeleboxCatalogUseCase"]
