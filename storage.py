import os
import re
import time
import uuid
import logging

logger = logging.getLogger(__name__)

# ============== FILENAME SANITIZING ==============
DEFAULT_BASENAME = 'document'
PLACEHOLDER_BASENAME = 'file_from_extension'
MAX_BASENAME_LENGTH = 100

_UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9_-]')
_UNDERSCORE_RUNS = re.compile(r'_{2,}')


def sanitize_filename(name):
    """
    Turn a client supplied filename into a base name made only of
    [A-Za-z0-9_-]. The extension is dropped; the result is never empty.
    """
    name = (name or '').replace('\\', '/').rsplit('/', 1)[-1].strip()

    head, dot, ext = name.rpartition('.')
    if not dot:
        base = name
    elif not head:
        # ".pdf" is all extension, "." is nothing at all
        base = PLACEHOLDER_BASENAME if ext else ''
    else:
        base = head

    base = _UNSAFE_CHARS.sub('_', base)
    base = _UNDERSCORE_RUNS.sub('_', base).strip('_')
    base = base[:MAX_BASENAME_LENGTH].rstrip('_')

    return base or DEFAULT_BASENAME


def _unique_stamp():
    # Millisecond timestamp plus a random suffix; the timestamp alone
    # collides when two uploads land in the same millisecond
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


# ============== STAGING ==============
class StagingArea:
    """Inbound and outbound drop zones for one process."""

    def __init__(self, upload_dir, output_dir):
        self.upload_dir = os.path.abspath(upload_dir)
        self.output_dir = os.path.abspath(output_dir)

    def ensure_directories(self):
        for directory in (self.upload_dir, self.output_dir):
            os.makedirs(directory, exist_ok=True)
        logger.info(f"Staging directories ready: {self.upload_dir}, {self.output_dir}")

    def upload_path_for(self, original_name):
        return os.path.join(self.upload_dir, f"{_unique_stamp()}-{sanitize_filename(original_name)}.pdf")

    def output_path_for(self, original_name):
        return os.path.join(self.output_dir, f"compressed-{_unique_stamp()}-{sanitize_filename(original_name)}.pdf")

    def stage_upload(self, file_storage):
        """Save an uploaded FileStorage into the upload directory and return its path."""
        path = self.upload_path_for(file_storage.filename)
        try:
            file_storage.save(path)
        except Exception:
            self.release(path)
            raise
        logger.info(f"Staged upload {file_storage.filename!r} at {path} ({os.path.getsize(path)} bytes)")
        return path

    def allocate_output(self, original_name):
        return self.output_path_for(original_name)

    @staticmethod
    def release(path):
        """Delete a staged file. Never raises; failures are only logged."""
        if not path:
            return
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Cleanup failed for {path}: {e}")
        else:
            logger.debug(f"Removed {path}")
