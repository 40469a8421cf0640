from __future__ import annotations

import json
import logging
import os
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from cookmate.config import Settings
from cookmate.services.repo.json_repo import _locked  # reuse existing cross-platform lock

log = logging.getLogger(__name__)


class MetricsLogger:
    """Append-only JSONL logger for latency metrics under data/.

    Writes one JSON object per line with fields:
      - ts: ISO timestamp (UTC)
      - kind: "latency"
      - name: short name (e.g., "chat_complete", "recipe_details_generate")
      - outcome: "ok" | "error"
      - duration_ms: float
      - extra: optional dict with contextual fields
    """

    def __init__(self, settings: Optional[Settings] = None, filename: str = "latency_log.jsonl") -> None:
        self.settings = settings or Settings()
        self.enabled = self.settings.metrics_enabled
        self.path = os.path.join(self.settings.data_dir, filename)

    def log_latency(
        self,
        name: str,
        duration_ms: float,
        outcome: str = "ok",
        extra: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
    ) -> None:
        if not self.enabled:
            return
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "kind": "latency",
            "name": name,
            "outcome": outcome,
            "duration_ms": float(duration_ms),
        }
        if user_id:
            entry["user"] = user_id
        if extra:
            entry["extra"] = extra
        line = (json.dumps(entry, ensure_ascii=False, separators=(",", ":"), default=str) + "\n").encode("utf-8")
        try:
            with _locked(self.path) as f:
                f.seek(0, os.SEEK_END)
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
        except Exception as e:
            # Metrics should never impact user flows.
            log.warning("Could not write metric %s: %s", name, e)

    @contextmanager
    def timed(self, name: str, user_id: Optional[str] = None, **extra: Any) -> Iterator[None]:
        """Time the block and log it; an exception is recorded as ``outcome="error"`` and re-raised."""
        t0 = time.perf_counter()
        outcome = "ok"
        try:
            yield
        except Exception:
            outcome = "error"
            raise
        finally:
            self.log_latency(name, (time.perf_counter() - t0) * 1000.0, outcome, extra or None, user_id)
