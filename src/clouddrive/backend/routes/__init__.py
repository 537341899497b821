from .downloads import router as downloads_router
from .files import router as files_router
from .folders import router as folders_router

__all__ = ["downloads_router", "files_router", "folders_router"]
