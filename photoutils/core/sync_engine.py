"""
Sync Engine

Core copy logic: single-file copy with collision resolution, and the
concurrent tree copier that feeds a bounded worker pool.

Author: photoutils Project
License: MIT
"""

import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from threading import Thread
from typing import Dict, List, Optional

from ..errors import PhotoUtilsError, PreconditionError, TargetExistsError, TransferError
from ..utils.logger import get_logger
from ..utils.file_ops import PathStatus, ensure_directory, probe
from ..config.schema import EngineConfig
from ..sync_engine.deduplicator import ContentComparator
from ..sync_engine.file_mover import FileMover
from ..sync_engine.resolver import CollisionResolver
from .events import EventKind, LoggingObserver, TransferEvent, TransferObserver
from .sync_queue import FileEntry, SyncQueue

logger = get_logger(__name__)


class TransferAction(Enum):
    """Outcome of a single-file operation."""
    COPIED = "copied"
    MOVED = "moved"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    FAILED = "failed"


@dataclass
class TransferResult:
    """Result of copying or moving one file."""
    success: bool
    source_path: str
    action: TransferAction
    destination_path: Optional[str] = None
    was_renamed: bool = False
    error_message: Optional[str] = None

    @property
    def is_duplicate(self) -> bool:
        return self.action == TransferAction.SKIPPED_DUPLICATE


@dataclass
class TreeCopyResult:
    """Result of a tree copy run."""
    source_path: str
    target_path: str
    results: List[TransferResult] = field(default_factory=list)
    directory_errors: List[str] = field(default_factory=list)
    removed_directories: List[str] = field(default_factory=list)

    @property
    def failed(self) -> List[TransferResult]:
        """Entries that could not be transferred."""
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        """True if every file and directory was handled."""
        return not self.failed and not self.directory_errors

    def get_stats(self) -> Dict[str, int]:
        """Summary counters."""
        counts = {action: 0 for action in TransferAction}
        for result in self.results:
            counts[result.action] += 1

        return {
            "files_processed": len(self.results),
            "files_copied": counts[TransferAction.COPIED],
            "files_moved": counts[TransferAction.MOVED],
            "duplicates_skipped": counts[TransferAction.SKIPPED_DUPLICATE],
            "files_renamed": sum(1 for r in self.results if r.success and r.was_renamed),
            "errors": counts[TransferAction.FAILED] + len(self.directory_errors),
            "directories_removed": len(self.removed_directories)
        }


class CopyEngine:
    """
    File copy engine with content-based deduplication.

    A target name that is already taken is never overwritten: the engine
    either finds an existing file with the same content and skips the
    transfer, or places the file under the next free name(N).ext.

    Tree copies use one walker (the calling thread) and a bounded pool of
    worker threads. The walker creates mirrored directories itself before
    enqueuing any file below them, and blocks when the queue is full.
    Workers only share the queue; their results are merged after every
    worker has finished.

    Placement is exclusive, so workers racing for the same free name never
    overwrite each other: the loser resolves again and takes the next name.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        observer: Optional[TransferObserver] = None
    ):
        """
        Initialize copy engine.

        Args:
            config: Settings for this engine (mode, hashing, workers)
            observer: Progress event sink (defaults to logging)
        """
        self.config = config or EngineConfig()
        self.observer = observer or LoggingObserver()
        self.comparator = ContentComparator.from_config(self.config)
        self.resolver = CollisionResolver(self.comparator)
        self.mover = FileMover(self.observer, chunk_size=self.config.chunk_size)

        logger.debug(
            f"CopyEngine initialized (move={self.config.move_mode}, "
            f"full_hash={self.config.full_hash_mode}, recursive={self.config.recursive})"
        )

    def copy_single_file(self, source, target) -> TransferResult:
        """
        Copy or move one file.

        Args:
            source: Source file path
            target: Target file path, or an existing directory to copy into

        Returns:
            TransferResult describing what happened

        Raises:
            PreconditionError: If the target's parent directory does not exist
        """
        source = os.fspath(source)
        target = os.fspath(target)

        if probe(target) == PathStatus.DIRECTORY:
            target = os.path.join(target, os.path.basename(source))
        else:
            parent = os.path.dirname(target) or "."
            if probe(parent) != PathStatus.DIRECTORY:
                raise PreconditionError(f"{parent}/: No such file or directory")

        return self._copy_file_internal(source, target)

    def _copy_file_internal(self, source: str, target: str) -> TransferResult:
        move = self.config.move_mode

        try:
            while True:
                resolution = self.resolver.resolve(source, target, self.config.full_hash_mode)
                was_renamed = resolution.path != target

                if resolution.is_duplicate:
                    if move and not self._is_same_file(source, resolution.path):
                        os.remove(source)
                    self.observer.notify(TransferEvent(EventKind.SKIP, source, resolution.path))
                    return TransferResult(
                        success=True,
                        source_path=source,
                        action=TransferAction.SKIPPED_DUPLICATE,
                        destination_path=resolution.path,
                        was_renamed=was_renamed
                    )

                try:
                    self.mover.transfer(source, resolution.path, move)
                except TargetExistsError:
                    # Another worker placed a file there after resolution
                    logger.debug(f"{resolution.path} was taken meanwhile, resolving {source} again")
                    continue

                return TransferResult(
                    success=True,
                    source_path=source,
                    action=TransferAction.MOVED if move else TransferAction.COPIED,
                    destination_path=resolution.path,
                    was_renamed=was_renamed
                )

        except TransferError as e:
            return self._failure(source, target, str(e.cause or e))
        except OSError as e:
            return self._failure(source, target, f"{e.strerror or e}: {e.filename or source}")

    @staticmethod
    def _is_same_file(path_a: str, path_b: str) -> bool:
        try:
            return os.path.samefile(path_a, path_b)
        except OSError:
            return False

    def _failure(self, source: str, target: str, message: str) -> TransferResult:
        logger.error(f"Copy {source} to {target} failed, skipped: {message}")
        self.observer.notify(TransferEvent(EventKind.ERROR, source, target, message))
        return TransferResult(
            success=False,
            source_path=source,
            action=TransferAction.FAILED,
            destination_path=target,
            error_message=message
        )

    def copy_tree(self, source, target) -> TreeCopyResult:
        """
        Copy or move the contents of a directory into another directory.

        Args:
            source: Source directory
            target: Existing target directory

        Returns:
            TreeCopyResult with per-file results

        Raises:
            PreconditionError: If source and target are the same, or either
                is not an existing directory
        """
        source = os.fspath(source)
        target = os.fspath(target)

        if os.path.realpath(source) == os.path.realpath(target):
            raise PreconditionError(f"{source} and {target} are identical (not copied).")

        if probe(source) != PathStatus.DIRECTORY:
            raise PreconditionError(f"{source}: No such directory")

        if probe(target) != PathStatus.DIRECTORY:
            raise PreconditionError(f"{target}: Invalid target, a directory expected")

        result = TreeCopyResult(source_path=source, target_path=target)
        worker_count = self.config.worker_count
        work_queue = SyncQueue(max_size=self.config.effective_queue_size, consumers=worker_count)

        logger.info(
            f"{'Moving' if self.config.move_mode else 'Copying'} {source} to {target} "
            f"with {worker_count} worker(s)"
        )

        worker_results: List[List[TransferResult]] = [[] for _ in range(worker_count)]
        workers = [
            Thread(
                target=self._worker_loop,
                args=(work_queue, target, worker_results[i]),
                name=f"copy-worker-{i}",
                daemon=True
            )
            for i in range(worker_count)
        ]
        for worker in workers:
            worker.start()

        walker_results: List[TransferResult] = []
        try:
            visited_dirs = self._walk(source, target, work_queue, walker_results, result.directory_errors)
        finally:
            work_queue.close()
            for worker in workers:
                worker.join()
        logger.debug(f"Work queue drained: {work_queue.get_statistics()}")

        result.results.extend(walker_results)
        for results in worker_results:
            result.results.extend(results)

        if self.config.move_mode:
            result.removed_directories = self._remove_empty_dirs(visited_dirs)

        logger.info(f"Finished {source} -> {target}: {result.get_stats()}")
        return result

    def _worker_loop(self, work_queue: SyncQueue, target: str, results: List[TransferResult]):
        """Drain the queue until it is closed."""
        while True:
            entry: Optional[FileEntry] = work_queue.get()
            if entry is None:
                break

            target_path = os.path.join(target, entry.relative_path)
            try:
                results.append(self.copy_single_file(entry.path, target_path))
            except PhotoUtilsError as e:
                results.append(self._failure(entry.path, target_path, str(e)))
            except Exception as e:
                logger.exception(f"Unexpected error copying {entry.path}")
                results.append(self._failure(entry.path, target_path, f"Unexpected error: {e}"))

    def _walk(
        self,
        source: str,
        target: str,
        work_queue: SyncQueue,
        results: List[TransferResult],
        directory_errors: List[str]
    ) -> List[str]:
        """
        Walk the source tree, mirroring directories and enqueuing files.

        Returns:
            Source directories that were entered, in visitation order
        """
        visited: List[str] = []
        target_real = os.path.realpath(target)

        def on_walk_error(err: OSError):
            path = err.filename or source
            logger.error(f"Cannot read directory {path}, skipped: {err}")
            directory_errors.append(path)
            self.observer.notify(TransferEvent(EventKind.ERROR, path, None, f"Cannot read directory: {err.strerror or err}"))

        for dirpath, dirnames, filenames in os.walk(source, onerror=on_walk_error):
            relative_dir = os.path.relpath(dirpath, source)

            for name in sorted(filenames):
                path = os.path.join(dirpath, name)
                relative_path = os.path.normpath(os.path.join(relative_dir, name))
                target_path = os.path.join(target, relative_path)

                try:
                    st = os.stat(path)
                except OSError as e:
                    results.append(self._failure(path, target_path, f"Cannot stat: {e.strerror or e}"))
                    continue

                if not stat.S_ISREG(st.st_mode):
                    logger.warning(f"Not a regular file, skipped: {path}")
                    continue

                work_queue.put(FileEntry(
                    path=path,
                    relative_path=relative_path,
                    size=st.st_size,
                    mtime=st.st_mtime,
                    mode=st.st_mode
                ))

            kept = []
            for name in sorted(dirnames):
                if not self.config.recursive:
                    continue

                path = os.path.join(dirpath, name)
                if os.path.islink(path):
                    logger.warning(f"Symbolic link to directory not followed: {path}")
                    continue
                if os.path.realpath(path) == target_real:
                    logger.warning(f"Target directory lies inside the source, not descending: {path}")
                    continue

                target_dir = os.path.join(target, os.path.normpath(os.path.join(relative_dir, name)))
                if not ensure_directory(target_dir):
                    logger.error(f"{target_dir}: Directory can not be created, skipped")
                    directory_errors.append(target_dir)
                    self.observer.notify(TransferEvent(
                        EventKind.ERROR, path, target_dir, "Directory can not be created, skipped"
                    ))
                    continue

                visited.append(path)
                kept.append(name)

            # os.walk only descends into the names left in dirnames
            dirnames[:] = kept

        return visited

    def _remove_empty_dirs(self, directories: List[str]) -> List[str]:
        """Remove source directories, deepest first, leaving non-empty ones."""
        removed = []
        for directory in sorted(directories, reverse=True):
            try:
                os.rmdir(directory)
            except OSError as e:
                logger.debug(f"Leaving directory {directory}: {e}")
                continue
            removed.append(directory)
            self.observer.notify(TransferEvent(EventKind.REMOVE, directory))
        return removed
