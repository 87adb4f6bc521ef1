"""
Create tables that are missing from an existing database. Existing tables and rows are left alone.
Usage: python -m recruitment.scripts.ensure_tables
"""
from recruitment.database import ensure_tables_exist
from recruitment.logging_config import setup_logging


def main():
    setup_logging()
    created = ensure_tables_exist()
    if created:
        print(f"Created {len(created)} missing tables: {', '.join(created)}")
    else:
        print("DB table check complete: nothing to create.")


if __name__ == "__main__":
    main()
