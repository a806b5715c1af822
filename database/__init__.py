# database/__init__.py
"""
This file makes the database functions available at the package level,
allowing for cleaner imports in other parts of the application.
"""

# --- Core & Setup ---
from .config import DB_LOCK, get_connection
from .setup import ALL_ROLES, POLICY_MAKER, RESEARCHER, SCIENTIST, create_tables

# --- Users & Roles ---
from .user_manager import (
    change_user_password,
    create_user,
    get_all_roles,
    get_user_by_id,
    get_user_for_login,
    hash_password,
    is_user_active,
    set_user_status,
    update_last_login,
    verify_password,
)

# --- Projects, Samples & Metals ---
from .project_manager import (
    PROJECT_STATUSES,
    create_project,
    delete_project,
    get_all_projects,
    get_project_by_id,
    set_project_status,
    update_project,
)
from .sample_manager import (
    add_water_sample,
    delete_sample,
    get_heavy_metals_for_sample,
    get_sample_by_id,
    get_samples,
)

# --- HMPI Calculations ---
from .calculation_manager import (
    get_all_calculations,
    get_calculation_history,
    get_latest_calculation,
    save_calculation,
)

# --- Alerts ---
from .alerts_manager import (
    add_alert,
    get_alert_by_id,
    get_alert_counts,
    get_alerts,
    get_unresolved_alerts,
    resolve_alert,
)

# --- Analytics Queries ---
from .data_manager import frame_to_records, get_sample_overview

# --- System ---
from .audit_logger import add_audit_log, get_audit_logs
from .settings_manager import get_all_settings, get_setting, update_setting
