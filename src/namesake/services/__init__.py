from .file_service import FileService
from .match_service import MatchService

__all__ = ["FileService", "MatchService"]
