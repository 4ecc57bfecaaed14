"""
HTTP client for the analysis API, with the polling loop callers need.

The server never pushes results: a submission comes back as
{"status": "pending", ...} and the caller re-reads it until the status is
completed or failed. wait_for_result() does that at POLL_INTERVAL_SEC
(1 second by default) and gives up after POLL_TIMEOUT_SEC.

    client = AnalysisClient("http://localhost:8000")
    analysis = client.analyze("except:\\n    eval(x)", "python", "b.py")
    analysis["results"]["summary"]   # {"critical": 1, "high": 1, ...}
"""

import time
from typing import Callable, Optional

import httpx

from config.settings import settings

BASE_URL = "http://localhost:8000"
TERMINAL_STATUSES = ("completed", "failed")


class AnalysisClient:

    def __init__(
        self,
        base_url: str = BASE_URL,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client or httpx.Client(base_url=base_url, timeout=30.0)
        self._sleep = sleep

    def submit(self, code: str, language: str, filename: str) -> dict:
        resp = self.client.post(
            "/api/analyze",
            json={"code": code, "language": language, "filename": filename},
        )
        resp.raise_for_status()
        return resp.json()

    def upload(self, filename: str, content: bytes) -> dict:
        resp = self.client.post("/api/analyze/upload", files={"file": (filename, content)})
        resp.raise_for_status()
        return resp.json()

    def get(self, analysis_id: str) -> Optional[dict]:
        """One poll. Returns None if the analysis does not exist."""
        resp = self.client.get(f"/api/analyses/{analysis_id}")
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def wait_for_result(
        self,
        analysis_id: str,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> dict:
        """
        Poll until the analysis leaves pending.

        Raises:
            LookupError: the analysis does not exist
            TimeoutError: still pending after `timeout` seconds
        """
        interval = settings.POLL_INTERVAL_SEC if interval is None else interval
        timeout = settings.POLL_TIMEOUT_SEC if timeout is None else timeout

        start = time.monotonic()
        while True:
            analysis = self.get(analysis_id)
            if analysis is None:
                raise LookupError(f"Analysis {analysis_id} not found")
            if analysis["status"] in TERMINAL_STATUSES:
                return analysis
            if time.monotonic() - start >= timeout:
                raise TimeoutError(f"Analysis {analysis_id} still pending after {timeout}s")
            self._sleep(interval)

    def analyze(self, code: str, language: str, filename: str, **wait_kwargs) -> dict:
        """Submit and block until the analysis is completed or failed."""
        submitted = self.submit(code, language, filename)
        return self.wait_for_result(submitted["id"], **wait_kwargs)

    def recent(self, limit: int = 5) -> list[dict]:
        resp = self.client.get("/api/analyses/recent", params={"limit": limit})
        resp.raise_for_status()
        return resp.json()

    def stats(self) -> dict:
        resp = self.client.get("/api/stats")
        resp.raise_for_status()
        return resp.json()

    def languages(self) -> list[str]:
        resp = self.client.get("/api/languages")
        resp.raise_for_status()
        return resp.json()

    def close(self) -> None:
        self.client.close()
