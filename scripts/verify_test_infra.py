# scripts/verify_test_infra.py
from __future__ import annotations

import sys

from sqlalchemy import create_engine, inspect, text

from app.core.config import settings

REQUIRED_TABLES = {
    "members",
    "work_lines",
    "assignments",
    "day_site_status",
}


def die(msg: str) -> None:
    print(f"[verify-test-infra] ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


def main() -> None:
    engine = create_engine(settings.database_url, future=True)

    with engine.connect() as conn:
        print(f"[ok] connected ({engine.dialect.name})")

        # 1) alembic version must exist
        try:
            version = conn.execute(
                text("select version_num from alembic_version")
            ).scalar_one()
        except Exception as e:  # pragma: no cover
            die(f"alembic_version table missing: {e}")

        print(f"[ok] alembic_version = {version}")

        # 2) required tables
        existing = set(inspect(conn).get_table_names())
        missing = REQUIRED_TABLES - existing
        if missing:
            die(f"missing tables: {sorted(missing)}")

        print("[ok] required tables present")

        # 3) natural key on assignments
        pk = inspect(conn).get_pk_constraint("assignments")
        if sorted(pk.get("constrained_columns") or []) != ["date", "member_id", "work_line_id"]:
            die(f"assignments primary key is not (work_line_id, member_id, date): {pk}")

        print("[ok] assignments natural key")

    engine.dispose()
    print("[verify-test-infra] OK")


if __name__ == "__main__":
    main()
