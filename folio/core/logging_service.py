"""
Centralized logging service for the portfolio site.
Provides structured logging with database storage and console fallback.
"""

import json
import os
import sqlite3
import traceback
from datetime import datetime, timedelta
from flask import request, has_request_context, session
from .config import get_config_value


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _connect():
        db_path = get_config_value('LOGS_DB', 'app_logs.db')
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return sqlite3.connect(db_path)

    @staticmethod
    def _ensure_logs_table(conn):
        """Ensure the app_logs table exists"""
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS app_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                level TEXT NOT NULL,
                source TEXT NOT NULL,
                message TEXT NOT NULL,
                details TEXT,
                ip_address TEXT,
                user_agent TEXT,
                request_path TEXT,
                user_id TEXT
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_timestamp
            ON app_logs(timestamp DESC)
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_level
            ON app_logs(level)
        """)

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path, session.get('user_email')

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (admin_auth, content, storage, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier, defaults to the signed-in email
        """
        ip_address, user_agent, request_path, session_user = LoggingService._get_request_context()
        user_id = user_id or session_user

        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        timestamp = datetime.now().isoformat()

        try:
            conn = LoggingService._connect()
            try:
                LoggingService._ensure_logs_table(conn)
                conn.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level.upper(), source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
                conn.commit()
            finally:
                conn.close()

        except sqlite3.Error as e:
            # Fallback to console logging if database fails
            print(f"[{timestamp}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log user actions (sign-in, admin setup, content changes)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events (denied mutations, rejected sign-ins)"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def get_recent_logs(limit=100, level=None, source=None):
        """Return the newest log rows as dicts"""
        conditions = []
        params = []
        if level:
            conditions.append('level = ?')
            params.append(level.upper())
        if source:
            conditions.append('source = ?')
            params.append(source)
        where = f' WHERE {" AND ".join(conditions)}' if conditions else ''

        conn = LoggingService._connect()
        try:
            conn.row_factory = sqlite3.Row
            LoggingService._ensure_logs_table(conn)
            cursor = conn.execute(
                f'SELECT * FROM app_logs{where} ORDER BY id DESC LIMIT ?',
                params + [limit]
            )
            return [dict(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()

        try:
            conn = LoggingService._connect()
            try:
                LoggingService._ensure_logs_table(conn)
                cursor = conn.execute("DELETE FROM app_logs WHERE timestamp < ?", (cutoff_iso,))
                deleted_count = cursor.rowcount
                conn.commit()
            finally:
                conn.close()

            LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count

        except sqlite3.Error as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0

