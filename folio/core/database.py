"""
Document store helpers for the portfolio database.

Thin wrappers over sqlite3 that give every module the same small set of
record operations: insert, get, patch, delete and ordered listing.
Table and column names always come from module constants, never from requests.
"""

import json
import os
import sqlite3
from contextlib import contextmanager

from .config import get_config_value

# Columns holding JSON encoded lists/dicts, decoded on read
JSON_COLUMNS = {'links'}


class Database:

    @staticmethod
    def connect(path=None):
        conn = sqlite3.connect(path or Database.path())
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    @contextmanager
    def transaction(path=None):
        """Open a connection, commit on success, roll back on error, always close"""
        conn = Database.connect(path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def path():
        return get_config_value('PORTFOLIO_DB', 'portfolio.db')

    @staticmethod
    def init_portfolio_db():
        """Create the admin settings and content tables"""
        db_path = Database.path()
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        with Database.transaction(db_path) as conn:
            cursor = conn.cursor()

            # Singleton: the CHECK makes a second row impossible, so concurrent
            # first-time setups cannot both succeed
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS admin_settings (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    is_setup BOOLEAN NOT NULL DEFAULT 1,
                    admin_email TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS profile (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    name TEXT NOT NULL,
                    title TEXT NOT NULL,
                    bio TEXT NOT NULL,
                    email TEXT NOT NULL,
                    phone TEXT,
                    location TEXT,
                    website TEXT,
                    profile_image_id TEXT,
                    banner_image_id TEXT,
                    links TEXT NOT NULL DEFAULT '[]',
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS education (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    school TEXT NOT NULL,
                    degree TEXT NOT NULL,
                    field TEXT NOT NULL,
                    start_date TEXT NOT NULL,
                    end_date TEXT,
                    description TEXT NOT NULL,
                    location TEXT NOT NULL,
                    attachment_id TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS certificates (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    issuer TEXT NOT NULL,
                    date TEXT NOT NULL,
                    description TEXT NOT NULL,
                    url TEXT,
                    attachment_id TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS achievements (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    date TEXT NOT NULL,
                    description TEXT NOT NULL,
                    attachment_id TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

            cursor.execute('CREATE INDEX IF NOT EXISTS idx_education_date ON education(start_date)')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_certificates_date ON certificates(date)')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_achievements_date ON achievements(date)')

            print("Portfolio database initialized successfully")

        return db_path

    # ===== Record helpers =====

    @staticmethod
    def _row_to_dict(row):
        if row is None:
            return None
        record = dict(row)
        for column in JSON_COLUMNS:
            if column in record and isinstance(record[column], str):
                try:
                    record[column] = json.loads(record[column])
                except (json.JSONDecodeError, TypeError):
                    record[column] = []
        return record

    @staticmethod
    def _encode(fields):
        encoded = {}
        for key, value in fields.items():
            if key in JSON_COLUMNS and not isinstance(value, str):
                value = json.dumps(value or [])
            encoded[key] = value
        return encoded

    @staticmethod
    def insert(table, record):
        """Insert a record and return its id.

        Raises sqlite3.IntegrityError when a constraint (e.g. a singleton
        CHECK or UNIQUE) is violated.
        """
        record = Database._encode(record)
        columns = ', '.join(record.keys())
        placeholders = ', '.join('?' for _ in record)
        with Database.transaction() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f'INSERT INTO {table} ({columns}) VALUES ({placeholders})',
                list(record.values())
            )
            return cursor.lastrowid

    @staticmethod
    def get(table, record_id):
        with Database.transaction() as conn:
            cursor = conn.cursor()
            cursor.execute(f'SELECT * FROM {table} WHERE id = ?', (record_id,))
            return Database._row_to_dict(cursor.fetchone())

    @staticmethod
    def patch(table, record_id, fields, touch=False):
        """Update the given fields of one record. Returns True if a row changed."""
        if not fields:
            return False
        fields = Database._encode(fields)
        set_clauses = [f"{key} = ?" for key in fields]
        if touch:
            set_clauses.append("updated_at = CURRENT_TIMESTAMP")
        values = list(fields.values()) + [record_id]
        with Database.transaction() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"UPDATE {table} SET {', '.join(set_clauses)} WHERE id = ?",
                values
            )
            return cursor.rowcount > 0

    @staticmethod
    def delete(table, record_id):
        """Delete one record. Returns True if it existed."""
        with Database.transaction() as conn:
            cursor = conn.cursor()
            cursor.execute(f'DELETE FROM {table} WHERE id = ?', (record_id,))
            return cursor.rowcount > 0

    @staticmethod
    def list_by(table, order_field, descending=True):
        """List every record ordered by an indexed field.

        Ties on the field fall back to insertion order in the same direction,
        so the newest insert comes first when descending.
        """
        direction = 'DESC' if descending else 'ASC'
        with Database.transaction() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f'SELECT * FROM {table} ORDER BY {order_field} {direction}, id {direction}'
            )
            return [Database._row_to_dict(row) for row in cursor.fetchall()]
