from .base_models import BaseModel

__all__ = ["BaseModel"]
