# database/user_manager.py
"""
Manages all database operations related to users, roles, and authentication.
"""
import datetime
import hashlib
import json
import os
import sqlite3
from .config import DB_LOCK, get_connection

# --- Password Hashing Functions ---

def hash_password(password, salt=None):
    """
    Hashes a password with a salt. Generates a new salt if one isn't provided.
    Returns the hashed password and the salt used.
    """
    if salt is None:
        salt = os.urandom(16).hex()
    salted_password = password.encode('utf-8') + salt.encode('utf-8')
    hashed_password = hashlib.sha256(salted_password).hexdigest()
    return hashed_password, salt

def verify_password(stored_hashed_password, provided_password, salt):
    """
    Verifies a provided password against a stored hash and salt.
    """
    hashed_password, _ = hash_password(provided_password, salt)
    return hashed_password == stored_hashed_password

# --- Role Functions ---

def get_all_roles():
    """Returns the role catalogue shown on the role selection screen."""
    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute("SELECT id, name, title, description, features FROM roles ORDER BY id").fetchall()
        conn.close()
    roles = []
    for row in rows:
        role = dict(row)
        role['features'] = json.loads(role['features']) if role['features'] else []
        roles.append(role)
    return roles

# --- User Management Functions ---

def create_user(full_name, email, password, role_name, organization=None):
    """
    Creates a new active user for the given role and returns its ID.
    Raises ValueError for an unknown role, missing fields, or a taken email.
    """
    if not full_name or not email or not password:
        raise ValueError("Full name, email and password are required.")

    hashed_pass, salt = hash_password(password)
    created_at = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    with DB_LOCK:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM roles WHERE name = ?", (role_name,))
            role_result = cursor.fetchone()
            if not role_result:
                raise ValueError(f"Role '{role_name}' not found.")
            try:
                cursor.execute(
                    """INSERT INTO users (full_name, email, organization, role_id, hashed_password, salt, created_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?)""",
                    (full_name, email.strip().lower(), organization, role_result[0], hashed_pass, salt, created_at)
                )
            except sqlite3.IntegrityError:
                raise ValueError(f"A user with email '{email}' already exists.")
            new_user_id = cursor.lastrowid
            conn.commit()
        finally:
            conn.close()
    return new_user_id

def get_user_for_login(email):
    """
    Retrieves essential user details for the login process.
    """
    with DB_LOCK:
        conn = get_connection()
        row = conn.execute("""
            SELECT u.id, u.full_name, u.hashed_password, u.salt, r.name as role_name
            FROM users u
            JOIN roles r ON u.role_id = r.id
            WHERE u.email = ? AND u.status = 'Active'
        """, ((email or '').strip().lower(),)).fetchone()
        conn.close()
    return dict(row) if row else None

def get_user_by_id(user_id):
    """Fetches a user's public details together with the role name."""
    with DB_LOCK:
        conn = get_connection()
        row = conn.execute("""
            SELECT u.id, u.full_name, u.email, u.organization, u.status, u.created_at, u.last_login,
                   r.name as role_name
            FROM users u
            JOIN roles r ON u.role_id = r.id
            WHERE u.id = ?
        """, (user_id,)).fetchone()
        conn.close()
    return dict(row) if row else None

def update_last_login(user_id):
    """
    Updates the 'last_login' timestamp for a specific user to the current time.
    """
    current_timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    with DB_LOCK:
        conn = get_connection()
        conn.execute("UPDATE users SET last_login = ? WHERE id = ?", (current_timestamp, user_id))
        conn.commit()
        conn.close()

def set_user_status(user_id, status):
    """
    Changes a user's status between 'Active' and 'Inactive'.
    """
    if status not in ('Active', 'Inactive'):
        raise ValueError(f"Invalid user status '{status}'.")
    with DB_LOCK:
        conn = get_connection()
        conn.execute("UPDATE users SET status = ? WHERE id = ?", (status, user_id))
        conn.commit()
        conn.close()

def is_user_active(user_id):
    """Checks whether a user exists and is still active."""
    with DB_LOCK:
        conn = get_connection()
        row = conn.execute("SELECT status FROM users WHERE id = ?", (user_id,)).fetchone()
        conn.close()
    return bool(row) and row['status'] == 'Active'

def change_user_password(user_id, current_password, new_password):
    """
    Changes a user's password after verifying their current password.
    Returns (True, "Success message") or (False, "Error message").
    """
    with DB_LOCK:
        conn = get_connection()
        user_data = conn.execute("SELECT hashed_password, salt FROM users WHERE id = ?", (user_id,)).fetchone()
        if not user_data:
            conn.close()
            return False, "User not found."

        if not verify_password(user_data['hashed_password'], current_password, user_data['salt']):
            conn.close()
            return False, "Incorrect current password."

        new_hashed_password, new_salt = hash_password(new_password)
        conn.execute(
            "UPDATE users SET hashed_password = ?, salt = ? WHERE id = ?",
            (new_hashed_password, new_salt, user_id)
        )
        conn.commit()
        conn.close()

    return True, "Password updated successfully."
