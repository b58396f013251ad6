from __future__ import annotations

import time
from typing import Optional
from uuid import uuid4


def new_request_id() -> str:
    return uuid4().hex


def request_log_fields(*, method: str, path: str, status_code: int, duration_ms: float, client_ip: Optional[str]) -> dict[str, object]:
    return {
        "ctx_method": method,
        "ctx_path": path,
        "ctx_status_code": int(status_code),
        "ctx_duration_ms": round(float(duration_ms), 2),
        "ctx_client_ip": client_ip or "",
    }


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0
