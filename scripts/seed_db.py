"""Load database/seed.sql into a database created by init_db.py.

The seed uses INSERT IGNORE, so running it twice is harmless.
"""

from __future__ import annotations

from init_db import load_db_config, seed

if __name__ == "__main__":
    seed(load_db_config())
