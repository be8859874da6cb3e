from __future__ import annotations

import os
import sys
from pathlib import Path

# Allow running as: python scripts/users_smoketest.py
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from fastapi.testclient import TestClient

from user_service.main import app
from user_service.settings import get_settings


def main() -> int:
    token = os.getenv("API_TOKEN") or get_settings().api_token
    c = TestClient(app, headers={"Authorization": f"Bearer {token}"})

    r = c.get("/users")
    print("/users(empty)", r.status_code, r.json())

    r = c.post("/users", json={"username": "alice", "age": 30})
    print("POST /users", r.status_code, r.json())
    if r.status_code != 201:
        return 1
    user_id = r.json()["id"]

    r = c.put(f"/users/{user_id}", json={"age": 31})
    print(f"PUT /users/{user_id}", r.status_code, r.json())

    r = c.post("/users", json={"username": "alice", "age": 5})
    print("POST /users(duplicate)", r.status_code, r.json())

    r = c.delete(f"/users/{user_id}")
    print(f"DELETE /users/{user_id}", r.status_code, r.json())

    r = c.get(f"/users/{user_id}")
    print(f"GET /users/{user_id}(after delete)", r.status_code, r.json())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
