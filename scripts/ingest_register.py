"""
Load the Home Office sponsor register CSV into the configured database.

Usage:
    python scripts/ingest_register.py path/to/register.csv [--replace]
"""

import sys

from sponsorscope.data.ingest import main


if __name__ == "__main__":
    sys.exit(main())
