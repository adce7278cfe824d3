import logging
import os
import tempfile
from typing import Iterable

from treemirror.exceptions import MirrorFilesystemError

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".part"


def is_temp_name(name: str) -> bool:
    """True for the hidden temporary names `AtomicFileWriter` writes into."""
    return name.startswith(".") and name.endswith(TEMP_SUFFIX)


class AtomicFileWriter:
    """Publish a byte stream under a final name without exposing partial files.

    Bytes go to a uniquely named hidden temporary file in the target
    directory, which is then renamed onto the final name. Same directory
    means same filesystem, so the rename is atomic. Any failure before the
    rename removes the temporary file and leaves the final name untouched.
    """

    def __init__(self, file_mode: int = 0o644):
        self.file_mode = file_mode

    def write(self, directory: str, final_name: str, chunks: Iterable[bytes]) -> str:
        """Write `chunks` to `directory/final_name`; return the final path.

        Errors raised by `chunks` itself propagate unchanged; local I/O errors
        are raised as MirrorFilesystemError.
        """
        final_path = os.path.join(directory, final_name)
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{final_name}.", suffix=TEMP_SUFFIX)
        except OSError as e:
            raise MirrorFilesystemError(final_path, e) from e

        try:
            with os.fdopen(fd, "wb") as out:
                for chunk in chunks:
                    if chunk:
                        out.write(chunk)
                out.flush()
                os.fsync(out.fileno())
            os.chmod(tmp_path, self.file_mode)
            os.replace(tmp_path, final_path)
        except OSError as e:
            self._discard(tmp_path)
            raise MirrorFilesystemError(final_path, e) from e
        except BaseException:
            self._discard(tmp_path)
            raise

        logger.debug("Published %s", final_path)
        return final_path

    def _discard(self, tmp_path: str) -> None:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove temporary file %s: %s", tmp_path, e)
