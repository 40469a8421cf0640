from __future__ import annotations

import io
import json
import os
import tempfile
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from cookmate.services.exceptions import RepoError

# Cross-platform file lock (fcntl for *nix; msvcrt for Windows)
@contextmanager
def _locked(path: str) -> Iterator[io.FileIO]:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    f = open(path, "a+b")  # create if missing
    try:
        try:
            import fcntl  # type: ignore
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            locker = ("fcntl", None)
        except Exception:
            try:
                import msvcrt  # type: ignore
                msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)
                locker = ("msvcrt", 1)
            except Exception as e:
                f.close()
                raise RepoError(f"Could not lock file {path}: {e}") from e
        yield f
    finally:
        # Unlock
        try:
            if locker[0] == "fcntl":
                import fcntl  # type: ignore
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            else:
                import msvcrt  # type: ignore
                msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, locker[1])
        except Exception:
            pass
        f.close()


def _atomic_write(path: str, data: bytes) -> None:
    d = os.path.dirname(path) or "."
    os.makedirs(d, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=d)
    try:
        with os.fdopen(fd, "wb") as w:
            w.write(data)
            w.flush()
            os.fsync(w.fileno())
        os.replace(tmp, path)
    except Exception as e:
        try:
            os.remove(tmp)
        except Exception:
            pass
        raise RepoError(f"Atomic write failed for {path}: {e}") from e


class JSONDocumentFile:
    """One JSON object on disk, read and rewritten whole.

    The data file is swapped by ``os.replace`` on every save, so writers
    serialise on a ``.lock`` sidecar instead of the data file itself.
    """

    def __init__(self, path: str):
        self.path = path
        self.lock_path = path + ".lock"

    def read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "rb") as f:
                raw = f.read() or b"{}"
            obj = json.loads(raw.decode("utf-8"))
        except (OSError, ValueError) as e:
            raise RepoError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(obj, dict):
            raise RepoError(f"Expected a JSON object in {self.path}")
        return obj

    def write(self, obj: Dict[str, Any]) -> None:
        try:
            payload = json.dumps(obj, ensure_ascii=False, indent=2, default=str).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise RepoError(f"Could not serialise data for {self.path}: {e}") from e
        _atomic_write(self.path, payload)

    @contextmanager
    def transaction(self) -> Iterator[Dict[str, Any]]:
        """Read under the lock, let the caller mutate, write back on clean exit."""
        with _locked(self.lock_path):
            obj = self.read()
            yield obj
            self.write(obj)
