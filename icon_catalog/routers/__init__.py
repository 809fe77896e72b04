from .icons import router as icons_router

__all__ = ["icons_router"]
