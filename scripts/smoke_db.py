#!/usr/bin/env python3
"""
Check that the configured database accepts connections
Usage: python scripts/smoke_db.py
"""

import sys

from sqlalchemy import text

from accounting_api.database import SessionLocal


def main() -> int:
    db = SessionLocal()
    try:
        result = db.execute(text("SELECT 1 AS ok")).fetchone()
        print(f"DB OK {dict(result._mapping)}")
        return 0
    except Exception as e:
        print(f"DB FAIL {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
