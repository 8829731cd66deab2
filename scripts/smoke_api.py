#!/usr/bin/env python3
"""
Boot the API in-process and call the health endpoint
Usage: python scripts/smoke_api.py
"""

import sys

from fastapi.testclient import TestClient

from accounting_api.config import API_PREFIX
from accounting_api.main import app


def main() -> int:
    try:
        with TestClient(app) as client:
            response = client.get(f"{API_PREFIX}/health")
        print(f"API OK {{'status': {response.status_code}, 'json': {response.json()}}}")
        return 0 if response.status_code == 200 else 1
    except Exception as e:
        print(f"API FAIL {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
