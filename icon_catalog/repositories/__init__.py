from .icons_repository import IconsRepository
from .svgs_repository import SvgsRepository

__all__ = ["IconsRepository", "SvgsRepository"]
