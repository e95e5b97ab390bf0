"""
File Mover

Copies or moves one file to an already resolved target path.

Author: photoutils Project
License: MIT
"""

import errno
import os
import shutil
import stat
from typing import Optional

from ..errors import TargetExistsError, TransferError
from ..utils.logger import get_logger
from ..core.events import EventKind, LoggingObserver, TransferEvent, TransferObserver

logger = get_logger(__name__)

# link() failures that mean "use a copy instead"
LINK_FALLBACK_ERRNOS = frozenset({errno.EXDEV, errno.EPERM, errno.EMLINK, errno.ENOTSUP, errno.EOPNOTSUPP})


class FileMover:
    """
    Single-file transfer.

    Placement never overwrites: a copy creates the target exclusively and a
    move hard links it before removing the source. When the target path
    already exists, TargetExistsError is raised and nothing is changed, so
    the caller can pick another name. Copies carry over the source's
    permission bits and timestamps.
    """

    def __init__(self, observer: Optional[TransferObserver] = None, chunk_size: int = 65536):
        """
        Initialize file mover.

        Args:
            observer: Receives one event per successful transfer
            chunk_size: Read size when copying
        """
        self.observer = observer or LoggingObserver()
        self.chunk_size = chunk_size

    def transfer(self, source: str, target: str, move: bool = False):
        """
        Copy or move a file to a path that must not exist yet.

        Args:
            source: Source file path
            target: Destination file path
            move: Remove the source after placing it

        Raises:
            TargetExistsError: If something already exists at target; nothing
                was written and the source is untouched
            TransferError: If the operation failed
        """
        if move:
            self._move(source, target)
            self.observer.notify(TransferEvent(EventKind.MOVE, source, target))
        else:
            self._copy(source, target)
            self.observer.notify(TransferEvent(EventKind.COPY, source, target))

    def _copy(self, source: str, target: str):
        """
        Copy contents, permission bits and timestamps into a new file.

        The target is created exclusively. A partially written target is
        removed on failure.
        """
        logger.debug(f"Copying {source} to {target}")
        try:
            st = os.stat(source)
            with open(source, 'rb') as fsrc:
                fdst = open(target, 'xb')
                try:
                    with fdst:
                        shutil.copyfileobj(fsrc, fdst, self.chunk_size)
                    os.chmod(target, stat.S_IMODE(st.st_mode))
                    os.utime(target, ns=(st.st_atime_ns, st.st_mtime_ns))
                except OSError:
                    self._discard(target)
                    raise
        except FileExistsError as e:
            logger.debug(f"Target appeared before copy: {target}")
            raise TargetExistsError(source, target, e) from e
        except OSError as e:
            logger.error(f"Error copying {source} to {target}: {e}")
            raise TransferError(source, target, e) from e

    def _move(self, source: str, target: str):
        """
        Hard link the source at target, then unlink the source.

        Where linking is impossible (other filesystem, no link support) the
        file is copied exclusively instead. Either way an existing target is
        never replaced.
        """
        logger.debug(f"Moving {source} to {target}")
        try:
            os.link(source, target)
        except FileExistsError as e:
            logger.debug(f"Target appeared before move: {target}")
            raise TargetExistsError(source, target, e) from e
        except OSError as e:
            if e.errno not in LINK_FALLBACK_ERRNOS:
                logger.error(f"Error moving {source} to {target}: {e}")
                raise TransferError(source, target, e) from e
            logger.debug(f"Cannot link {source} ({e.strerror}), copying instead")
            self._copy(source, target)

        # The source is only removed once the target is complete
        try:
            os.remove(source)
        except OSError as e:
            logger.error(f"Placed {target} but could not remove {source}: {e}")
            raise TransferError(source, target, e) from e

    @staticmethod
    def _discard(path: str):
        try:
            os.remove(path)
        except OSError as e:
            logger.warning(f"Could not remove incomplete file {path}: {e}")
