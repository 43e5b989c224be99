#!/usr/bin/env python3
"""
Script: init_schema.py
Purpose: Create the OrderDesk tables in DATABASE_URL

This script:
1. Shows the statements from orderdesk/core/schema.sql
2. Applies them (CREATE TABLE IF NOT EXISTS, safe to re-run)
3. Verifies the tables exist

Usage:
    cd backend && source venv/bin/activate
    python scripts/migrations/init_schema.py [--dry-run] [--drop]

Options:
    --dry-run    Print the schema without touching the database
    --drop       Drop the existing OrderDesk tables first (destroys data)
"""

import sys
import argparse
from pathlib import Path

# Add backend to path
BACKEND_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(BACKEND_DIR))

from dotenv import load_dotenv

# Load environment
env_path = BACKEND_DIR / '.env.development'
if env_path.exists():
    load_dotenv(env_path)
else:
    load_dotenv(BACKEND_DIR / '.env')

from orderdesk.core.database import SCHEMA_PATH, apply_schema, get_db_connection_dict_with_retry

TABLES = ['customers', 'products', 'orders', 'order_items']


def print_header(title: str):
    """Print formatted header"""
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}\n")


def check_tables_exist() -> dict:
    """Check which OrderDesk tables currently exist"""
    conn = get_db_connection_dict_with_retry()
    cursor = conn.cursor()

    try:
        result = {}
        for table in TABLES:
            cursor.execute("""
                SELECT EXISTS (
                    SELECT FROM information_schema.tables
                    WHERE table_schema = 'public' AND table_name = %s
                ) AS present
            """, (table,))
            result[table] = cursor.fetchone()['present']
        return result
    finally:
        cursor.close()
        conn.close()


def main():
    parser = argparse.ArgumentParser(description="Create the OrderDesk database schema")
    parser.add_argument('--dry-run', action='store_true', help="Print the schema and exit")
    parser.add_argument('--drop', action='store_true', help="Drop existing tables first")
    args = parser.parse_args()

    print_header("OrderDesk schema")

    if args.dry_run:
        print(SCHEMA_PATH.read_text())
        print("Dry run: nothing applied")
        return 0

    if args.drop:
        print("Dropping existing tables: " + ", ".join(TABLES))

    apply_schema(drop_existing=args.drop)

    missing = [table for table, present in check_tables_exist().items() if not present]
    if missing:
        print(f"❌ Missing tables after migration: {', '.join(missing)}")
        return 1

    print(f"✅ Tables ready: {', '.join(TABLES)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
