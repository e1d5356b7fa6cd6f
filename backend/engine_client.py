"""
engine_client.py

A small API client for the inventory engine backend, for schedulers and bots
that trigger runs and read their results.

What it provides:
- run_rebalance / run_allocate / run_recall: POST /inventory-engine/run
- list_runs / get_run: the run ledger
- list_suggestions / list_recommendations: a run's output batch

Environment variables expected:
- ENGINE_API_URL: e.g. "https://your-domain.com/api"

Dependencies:
- requests (pip install requests)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class EngineApiClient:
    base_url: str
    timeout: float = 120

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, *, json: Any = None, params: Dict[str, Any] | None = None) -> Any:
        resp = requests.request(
            method,
            self._url(path),
            json=json,
            params=params,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        if resp.status_code >= 400:
            raise ApiError(f"{method} {path} failed ({resp.status_code}): {resp.text}", status_code=resp.status_code)

        if resp.status_code == 204:
            return None
        return resp.json()

    # ----------------------------
    # Runs
    # ----------------------------

    def run(self, tenant_id: str, action: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        payload = {"tenant_id": tenant_id, "action": action}
        if user_id:
            payload["user_id"] = user_id
        return self._request("POST", "/inventory-engine/run", json=payload)

    def run_rebalance(self, tenant_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        return self.run(tenant_id, "rebalance", user_id=user_id)

    def run_allocate(self, tenant_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        return self.run(tenant_id, "allocate", user_id=user_id)

    def run_recall(self, tenant_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        return self.run(tenant_id, "recall", user_id=user_id)

    # ----------------------------
    # Ledger reads
    # ----------------------------

    def list_runs(self, tenant_id: str, limit: int = 20) -> Any:
        return self._request("GET", "/inventory-engine/runs", params={"tenant_id": tenant_id, "limit": limit})

    def get_run(self, run_id: str) -> Any:
        return self._request("GET", f"/inventory-engine/runs/{run_id}")

    def list_suggestions(
        self,
        run_id: str,
        *,
        transfer_type: Optional[str] = None,  # "push" | "lateral" | "recall"
        priority: Optional[str] = None,  # "P1" | "P2" | "P3"
    ) -> Any:
        params: Dict[str, Any] = {}
        if transfer_type:
            params["transfer_type"] = transfer_type
        if priority:
            params["priority"] = priority
        return self._request("GET", f"/inventory-engine/runs/{run_id}/suggestions", params=params or None)

    def list_recommendations(self, run_id: str) -> Any:
        return self._request("GET", f"/inventory-engine/runs/{run_id}/recommendations")


def client_from_env() -> EngineApiClient:
    base_url = os.getenv("ENGINE_API_URL", "").strip()
    if not base_url:
        raise RuntimeError("Missing ENGINE_API_URL")
    return EngineApiClient(base_url=base_url)


if __name__ == "__main__":
    import sys

    c = client_from_env()
    tenant = sys.argv[1] if len(sys.argv) > 1 else "demo-tenant"
    action = sys.argv[2] if len(sys.argv) > 2 else "rebalance"
    result = c.run(tenant, action)
    print("Run result:", result)
    if action == "allocate":
        print("Recommendations:", c.list_recommendations(result["run_id"]))
    else:
        print("Suggestions:", c.list_suggestions(result["run_id"]))
