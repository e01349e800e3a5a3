"""
Create Inspections Table - Rice Inspection Grading API

Creates the INSPECTIONS table in the configured Snowflake schema (idempotent).

Run: python -m app.scripts.create_inspections_table [--show]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(project_root))

from app.config import settings
from app.core.exceptions import RepositoryException
from app.logging_config import configure_logging
from app.repositories.inspection_repository import CREATE_TABLE_SQL, InspectionRepository


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the INSPECTIONS table in Snowflake")
    parser.add_argument("--show", action="store_true", help="Print the DDL instead of executing it")
    args = parser.parse_args(argv)

    if args.show:
        print(CREATE_TABLE_SQL.strip())
        return 0

    configure_logging()
    print(f"Target: {settings.SNOWFLAKE_DATABASE}.{settings.SNOWFLAKE_SCHEMA}.INSPECTIONS")
    try:
        InspectionRepository().create_table()
    except RepositoryException as e:
        print(f"Failed to create INSPECTIONS: {e}")
        return 1

    print("INSPECTIONS table ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
