"""
Classifier

Files the photos and videos at the top level of a directory into dated
subfolders of a target directory, using the copy engine for every transfer.

Author: photoutils Project
License: MIT
"""

import os
from threading import Thread
from typing import List, Optional

from ..errors import PhotoUtilsError, PreconditionError
from ..utils.logger import get_logger
from ..utils.file_ops import PathStatus, has_extension, probe
from ..config.schema import ClassifyConfig, EngineConfig
from ..core.events import EventKind, LoggingObserver, TransferEvent, TransferObserver
from ..core.sync_engine import CopyEngine, TransferAction, TransferResult, TreeCopyResult
from ..core.sync_queue import SyncQueue
from .dates import get_photo_date
from .folders import folder_name, make_folder

logger = get_logger(__name__)


class Classifier:
    """
    Photo classification by date.

    Only regular files directly inside the source directory with a known
    photo or video extension are considered. Name collisions inside the
    dated folders are resolved by the copy engine.
    """

    def __init__(
        self,
        config: Optional[ClassifyConfig] = None,
        engine_config: Optional[EngineConfig] = None,
        observer: Optional[TransferObserver] = None
    ):
        """
        Initialize classifier.

        Args:
            config: Folder policy, extensions and worker counts
            engine_config: Transfer settings (move/copy, hashing)
            observer: Progress event sink
        """
        self.config = config or ClassifyConfig()
        self.engine_config = engine_config or EngineConfig(move_mode=True)
        self.observer = observer or LoggingObserver()
        self.engine = CopyEngine(self.engine_config, self.observer)

    @property
    def worker_count(self) -> int:
        """Number of workers for the current transfer mode."""
        if self.engine_config.move_mode:
            return self.config.move_workers
        return self.config.copy_workers

    def classify_file(self, file_path: str, target: str) -> TransferResult:
        """
        Classify one file into its dated folder under target.

        Raises:
            ClassifyError: If the file's date or folder cannot be determined
        """
        date = get_photo_date(file_path)
        folder = make_folder(target, folder_name(file_path, date, self.config))
        return self.engine.copy_single_file(file_path, os.path.join(folder, os.path.basename(file_path)))

    def find_files(self, source: str) -> List[str]:
        """Files at the top level of source that should be classified."""
        files = []
        with os.scandir(source) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                if not entry.is_file():
                    continue
                if not has_extension(entry.name, self.config.extensions):
                    continue
                files.append(entry.path)
        return files

    def run(self, source, target=None) -> TreeCopyResult:
        """
        Classify every matching file of source into target.

        Args:
            source: Directory holding the files
            target: Directory receiving the dated folders (defaults to source)

        Returns:
            TreeCopyResult with one result per file

        Raises:
            PreconditionError: If source or target is not a directory
        """
        source = os.fspath(source)
        target = os.fspath(target) if target is not None else source

        for path in (source, target):
            if probe(path) != PathStatus.DIRECTORY:
                raise PreconditionError(f"{path}: No such directory")

        result = TreeCopyResult(source_path=source, target_path=target)
        worker_count = self.worker_count
        work_queue = SyncQueue(max_size=worker_count, consumers=worker_count)

        worker_results: List[List[TransferResult]] = [[] for _ in range(worker_count)]
        workers = [
            Thread(
                target=self._worker_loop,
                args=(work_queue, target, worker_results[i]),
                name=f"classify-worker-{i}",
                daemon=True
            )
            for i in range(worker_count)
        ]
        for worker in workers:
            worker.start()

        try:
            for file_path in self.find_files(source):
                work_queue.put(file_path)
        finally:
            work_queue.close()
            for worker in workers:
                worker.join()
        logger.debug(f"Work queue drained: {work_queue.get_statistics()}")

        for results in worker_results:
            result.results.extend(results)

        logger.info(f"Classified {source} into {target}: {result.get_stats()}")
        return result

    def _worker_loop(self, work_queue: SyncQueue, target: str, results: List[TransferResult]):
        """Drain the queue until it is closed."""
        while True:
            file_path = work_queue.get()
            if file_path is None:
                break

            try:
                results.append(self.classify_file(file_path, target))
            except PhotoUtilsError as e:
                results.append(self._failure(file_path, str(e)))
            except Exception as e:
                logger.exception(f"Unexpected error classifying {file_path}")
                results.append(self._failure(file_path, f"Unexpected error: {e}"))

    def _failure(self, file_path: str, message: str) -> TransferResult:
        logger.error(f"Classify {file_path} failed, skipped: {message}")
        self.observer.notify(TransferEvent(EventKind.ERROR, file_path, None, message))
        return TransferResult(
            success=False,
            source_path=file_path,
            action=TransferAction.FAILED,
            error_message=message
        )
