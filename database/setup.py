# database/setup.py
"""
Handles the initial setup of the database schema and default data.
"""
import json
import logging
from .config import DB_LOCK, get_connection

logger = logging.getLogger(__name__)

# Role names are stored on the session and checked by @role_required.
SCIENTIST = 'scientist'
POLICY_MAKER = 'policy_maker'
RESEARCHER = 'researcher'
ALL_ROLES = (SCIENTIST, POLICY_MAKER, RESEARCHER)

DEFAULT_ROLES = [
    (SCIENTIST, 'Scientist',
     'Complete access to data management, advanced calculations, comprehensive analysis tools, '
     'and professional report generation.',
     ['Advanced Data Analytics', 'HMPI Calculations', 'Quality Assurance Tools', 'Research Documentation']),
    (POLICY_MAKER, 'Policy Maker',
     'Strategic access to policy configuration, safety threshold management, comprehensive reporting, '
     'and regulatory compliance tools.',
     ['Policy Configuration', 'Regulatory Thresholds', 'Compliance Reports', 'Strategic Analytics']),
    (RESEARCHER, 'Researcher',
     'Academic access to visualization tools, published reports, trend analysis, and comparative studies.',
     ['Data Visualization', 'Research Access', 'Trend Analysis', 'Academic Resources']),
]

DEFAULT_SETTINGS = [
    ('session_timeout', '60'),
    ('default_timeframe_days', '30'),
]


def create_tables():
    """
    Creates all necessary tables for the application if they don't already exist.
    Also populates the 'roles' and 'settings' tables with their defaults.
    This function defines the entire database schema and its initial state.
    """
    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()

        # Table 1: User roles
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS roles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                title TEXT NOT NULL,
                description TEXT,
                features TEXT
            )
        ''')

        # Table 2: User accounts (one role per user)
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                full_name TEXT NOT NULL,
                email TEXT UNIQUE NOT NULL,
                organization TEXT,
                role_id INTEGER NOT NULL,
                hashed_password TEXT NOT NULL,
                salt TEXT NOT NULL,
                status TEXT DEFAULT 'Active',
                created_at TEXT NOT NULL,
                last_login TEXT,
                FOREIGN KEY (role_id) REFERENCES roles (id)
            )
        ''')

        # Table 3: Monitoring projects
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS projects (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                description TEXT,
                location TEXT NOT NULL,
                latitude REAL,
                longitude REAL,
                status TEXT NOT NULL DEFAULT 'active',
                created_by INTEGER,
                created_at TEXT NOT NULL,
                FOREIGN KEY (created_by) REFERENCES users (id)
            )
        ''')

        # Table 4: Water samples with their physical parameters
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS water_samples (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                project_id INTEGER NOT NULL,
                sample_name TEXT NOT NULL,
                collection_date TEXT NOT NULL,
                collection_time TEXT,
                latitude REAL,
                longitude REAL,
                depth_meters REAL,
                temperature_celsius REAL,
                ph_level REAL,
                dissolved_oxygen REAL,
                turbidity REAL,
                conductivity REAL,
                created_by INTEGER,
                created_at TEXT NOT NULL,
                FOREIGN KEY (project_id) REFERENCES projects (id) ON DELETE CASCADE,
                FOREIGN KEY (created_by) REFERENCES users (id)
            )
        ''')

        # Table 5: Heavy metal readings, one per metal and sample
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS heavy_metals (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                sample_id INTEGER NOT NULL,
                metal_type TEXT NOT NULL,
                concentration_mg_l REAL NOT NULL,
                detection_limit REAL,
                analysis_method TEXT,
                analysis_date TEXT,
                UNIQUE(sample_id, metal_type),
                FOREIGN KEY (sample_id) REFERENCES water_samples (id) ON DELETE CASCADE
            )
        ''')

        # Table 6: HMPI calculation history (append-only)
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS hmpi_calculations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                sample_id INTEGER NOT NULL,
                hmpi_value REAL NOT NULL,
                contamination_level TEXT NOT NULL,
                metal_contributions TEXT,
                recommendations TEXT,
                calculated_by INTEGER,
                calculated_at TEXT NOT NULL,
                FOREIGN KEY (sample_id) REFERENCES water_samples (id) ON DELETE CASCADE,
                FOREIGN KEY (calculated_by) REFERENCES users (id)
            )
        ''')

        # Table 7: Contamination alerts
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS alerts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                project_id INTEGER,
                sample_id INTEGER,
                alert_type TEXT NOT NULL,
                severity TEXT NOT NULL,
                message TEXT NOT NULL,
                created_at TEXT NOT NULL,
                resolved INTEGER NOT NULL DEFAULT 0,
                resolved_at TEXT,
                FOREIGN KEY (project_id) REFERENCES projects (id) ON DELETE CASCADE,
                FOREIGN KEY (sample_id) REFERENCES water_samples (id) ON DELETE CASCADE
            )
        ''')

        # Table 8: System-wide audit log
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS audit_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                user_id INTEGER,
                component TEXT,
                action TEXT NOT NULL,
                target TEXT,
                details TEXT,
                status TEXT,
                ip_address TEXT,
                FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE SET NULL
            )
        ''')

        # Table 9: System-wide settings (key-value store)
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT
            )
        ''')

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_samples_project ON water_samples (project_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_calculations_sample ON hmpi_calculations (sample_id)")

        for name, title, description, features in DEFAULT_ROLES:
            cursor.execute(
                "INSERT OR IGNORE INTO roles (name, title, description, features) VALUES (?, ?, ?, ?)",
                (name, title, description, json.dumps(features))
            )

        cursor.executemany("INSERT OR IGNORE INTO settings (key, value) VALUES (?, ?)", DEFAULT_SETTINGS)

        conn.commit()
        conn.close()
    logger.info("Database schema verified.")
