#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any


def _resolve_trace_dir(trace_dir: str | Path | None = None) -> Path | None:
    if trace_dir:
        return Path(trace_dir).expanduser()
    env_dir = os.getenv("SUBMISSION_TRACE_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    # the service only writes traces when a directory is configured
    return None


def _summarize_stage(stage: str, payload: Any, meta: Any) -> str:
    if not isinstance(payload, dict):
        return str(payload)
    stage = stage.strip().lower()
    if "error" in payload:
        url = meta.get("url") if isinstance(meta, dict) else None
        if url:
            return f"url={url} error={payload['error']}"
        return f"error={payload['error']}"
    if stage == "project":
        return f"project_id={payload.get('project_id')} variant={payload.get('variant')}"
    if stage == "identity":
        return f"authenticated={str(bool(payload.get('authenticated'))).lower()}"
    if stage == "link":
        return f"url={payload.get('url')} ok"
    if stage == "outcome":
        parts = [f"status={payload.get('status')}"]
        outcome = payload.get("outcome")
        if isinstance(outcome, dict) and outcome.get("failed_urls"):
            parts.append(f"failed={','.join(outcome['failed_urls'])}")
        return " ".join(parts)
    return f"keys={','.join(sorted(payload.keys()))}"


def _replay(trace_path: Path) -> int:
    if not trace_path.exists():
        print(f"trace file not found: {trace_path}", file=sys.stderr)
        return 1
    with trace_path.open("r", encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            raw = line.strip()
            if not raw:
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as exc:
                print(f"line {line_no} parse error: {exc}", file=sys.stderr)
                continue
            ts = data.get("ts", "")
            stage = data.get("stage", "")
            summary = _summarize_stage(stage, data.get("payload", {}), data.get("meta", {}))
            print(f"{ts} {stage} {summary}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a project submission trace (JSONL)")
    parser.add_argument("--submission-id", required=True, help="submission id to replay")
    parser.add_argument("--trace-dir", default=None, help="override trace directory")
    args = parser.parse_args(argv)

    trace_dir = _resolve_trace_dir(args.trace_dir)
    if trace_dir is None:
        print(
            "no trace directory: pass --trace-dir or set SUBMISSION_TRACE_DIR",
            file=sys.stderr,
        )
        return 2
    trace_path = trace_dir / f"{args.submission_id}.jsonl"
    return _replay(trace_path)


if __name__ == "__main__":
    raise SystemExit(main())
