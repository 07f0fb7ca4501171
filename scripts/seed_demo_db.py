"""
Create the demo SQLite DB the browser opens by default.

Usage:
  python scripts/seed_demo_db.py [path] [--force]

The schema is an arbitrary small cab-company example; the browser
discovers it at request time like any other database.
"""

import argparse
import sqlite3
import sys
from pathlib import Path

DEFAULT_PATH = Path(__file__).resolve().parents[1] / "data" / "browser.db"


def ensure_demo_db(path: Path, force: bool = False) -> bool:
    """Create demo SQLite DB if missing. Returns True when a DB was written."""
    if path.exists() and not force:
        print(f"Demo DB already exists at {path}")
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        conn.executescript(
            """
            DROP TABLE IF EXISTS drivers;
            DROP TABLE IF EXISTS cabs;
            DROP TABLE IF EXISTS rides;

            CREATE TABLE drivers (
                name TEXT NOT NULL,
                license_no TEXT UNIQUE,
                rating REAL
            );

            CREATE TABLE cabs (
                plate TEXT PRIMARY KEY,
                model TEXT,
                seats INTEGER DEFAULT 4
            );

            CREATE TABLE rides (
                driver_rowid INTEGER,
                cab_plate TEXT,
                fare REAL,
                started_at TEXT
            );

            INSERT INTO drivers (name, license_no, rating) VALUES
                ('Amina Yusuf', 'DL-1001', 4.8),
                ('Tom Becker', 'DL-1002', 4.5),
                ('Lena Park', 'DL-1003', NULL);

            INSERT INTO cabs (plate, model, seats) VALUES
                ('FC-001', 'Prius', 4),
                ('FC-002', 'Sienna', 7);

            INSERT INTO rides (driver_rowid, cab_plate, fare, started_at) VALUES
                (1, 'FC-001', 12.5, '2024-05-01T08:15:00'),
                (2, 'FC-002', 31.0, '2024-05-01T09:40:00'),
                (1, 'FC-001', 8.75, '2024-05-02T17:05:00');
            """
        )
        conn.commit()
    finally:
        conn.close()

    print(f"Demo DB created at {path}")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("path", nargs="?", default=str(DEFAULT_PATH))
    parser.add_argument("--force", action="store_true", help="overwrite tables")
    args = parser.parse_args()

    ensure_demo_db(Path(args.path), force=args.force)
    return 0


if __name__ == "__main__":
    sys.exit(main())
