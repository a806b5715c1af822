# auth/decorators.py
from functools import wraps
from flask import session, jsonify

def role_required(*allowed_roles):
    """
    A decorator to protect routes, ensuring the logged-in user has one of the allowed roles.
    Answers 401 when nobody is logged in and 403 for any other role.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Check if a user is logged in
            if 'user_role' not in session:
                return jsonify({"status": "error", "message": "You must be logged in to access this resource."}), 401

            if session['user_role'] not in allowed_roles:
                return jsonify({"status": "error", "message": "Your role does not have access to this resource."}), 403

            return f(*args, **kwargs)
        return decorated_function
    return decorator
