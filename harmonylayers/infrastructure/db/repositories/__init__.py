from .layers import DuplicateLayerTitleError, LayerRepository

__all__ = [
    "DuplicateLayerTitleError",
    "LayerRepository",
]
