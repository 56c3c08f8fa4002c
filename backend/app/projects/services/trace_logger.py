from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, is_dataclass
from datetime import date, datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

TRACE_DIR_ENV = "SUBMISSION_TRACE_DIR"

logger = logging.getLogger(__name__)


def _jsonable(obj: Any) -> Any:
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(item) for item in obj]
    if is_dataclass(obj) and not isinstance(obj, type):
        return _jsonable(asdict(obj))
    if hasattr(obj, "model_dump") and callable(getattr(obj, "model_dump")):
        return _jsonable(obj.model_dump())
    return str(obj)


def resolve_trace_dir(trace_dir: str | Path | None = None) -> Path | None:
    if trace_dir:
        return Path(trace_dir).expanduser()
    env_dir = os.getenv(TRACE_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return None


class SubmissionTrace:
    """Append-only JSONL record of one submission's stages."""

    def __init__(self, submission_id: str, trace_dir: str | Path) -> None:
        self._submission_id = str(submission_id)
        self._trace_dir = Path(trace_dir)
        self._trace_dir.mkdir(parents=True, exist_ok=True)
        self._path = self._trace_dir / f"{self._submission_id}.jsonl"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def submission_id(self) -> str:
        return self._submission_id

    def append(self, *, stage: str, payload: dict, meta: dict | None = None) -> None:
        self._write_line(self._entry(stage, payload, meta))

    def append_error(self, *, stage: str, error: str, meta: dict | None = None) -> None:
        self._write_line(self._entry(stage, {"error": str(error)}, meta))

    def _entry(self, stage: str, payload: dict, meta: dict | None) -> dict[str, Any]:
        return {
            "ts": datetime.now(timezone.utc).isoformat(),
            "submission_id": self._submission_id,
            "stage": str(stage),
            "payload": _jsonable(payload),
            "meta": _jsonable(meta or {}),
        }

    def _write_line(self, entry: dict[str, Any]) -> None:
        line = json.dumps(entry, ensure_ascii=False, separators=(",", ":"))
        # best-effort: a trace failure must not change the submission outcome
        try:
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
                handle.flush()
        except OSError as exc:
            logger.warning(
                "trace write failed for %s: %s",
                self._path,
                exc,
                extra={"submission_id": self._submission_id},
            )


def get_submission_trace(
    submission_id: str, trace_dir: str | Path | None = None
) -> SubmissionTrace | None:
    """Tracing is off unless a directory is given or SUBMISSION_TRACE_DIR is set."""
    resolved = resolve_trace_dir(trace_dir)
    if resolved is None:
        return None
    try:
        return SubmissionTrace(submission_id, trace_dir=resolved)
    except OSError as exc:
        logger.warning("trace directory %s unusable: %s", resolved, exc)
        return None
