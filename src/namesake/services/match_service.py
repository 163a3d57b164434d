from typing import Optional
import logging

from namesake.core.engine import ScanEngine
from namesake.core.models import FolderNode
from namesake.services.file_service import FileService

logger = logging.getLogger(__name__)


class MatchService:
    @staticmethod
    def trash_match(engine: ScanEngine, file_path: str) -> Optional[FolderNode]:
        """
        Moves a matched file to the trash and drops it from both match buckets.

        Args:
            engine: Engine holding the finished scan the file belongs to.
            file_path: Path of the matched file, as reported in its MatchEntry.

        Returns:
            Optional[FolderNode]: The folder tree rebuilt with updated counts,
            or None if the engine has no finished scan with results.

        Raises:
            RuntimeError: If the file is missing or cannot be trashed. Matches are left untouched.
        """
        FileService.move_to_trash(file_path)
        if not engine.remove_match(file_path):
            logger.warning(f"Trashed file was not among the current matches: {file_path}")
        return engine.rebuild_folder_tree()
