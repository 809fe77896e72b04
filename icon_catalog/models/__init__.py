"""SQLAlchemy models for the application."""

from icon_catalog.db import Base

# Import all models here to ensure they are registered with SQLAlchemy
from .icons import Icon
from .svgs import Svg

__all__ = ["Base", "Icon", "Svg"]
