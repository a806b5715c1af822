# routes/view_routes.py
"""
Session handling (login, logout, sign-up) and the role dashboards.
"""
from flask import Blueprint, jsonify, redirect, request, session, url_for
from database import (
    ALL_ROLES, POLICY_MAKER, RESEARCHER, SCIENTIST,
    add_audit_log, create_user, get_all_calculations, get_all_projects, get_all_roles,
    get_samples, get_unresolved_alerts, get_user_for_login, update_last_login, verify_password,
)
from auth.decorators import role_required
from dashboard_stats import policy_overview, researcher_overview, scientist_overview
from research_resources import CATEGORIES, search_resources

view_bp = Blueprint('view_bp', __name__)

ROLE_DASHBOARDS = {
    SCIENTIST: 'view_bp.scientist_dashboard',
    POLICY_MAKER: 'view_bp.policy_maker_dashboard',
    RESEARCHER: 'view_bp.researcher_dashboard',
}

def _submitted_data():
    """Accepts both JSON bodies and classic form posts."""
    return request.get_json(silent=True) or request.form.to_dict()

# --- Public Routes (No Login Required) ---

@view_bp.route('/')
def index():
    """The role selection screen: every role with its feature list."""
    return jsonify({
        "roles": get_all_roles(),
        "current_role": session.get('user_role'),
    })

@view_bp.route('/signup', methods=['POST'])
def signup():
    """Registers a new user for the selected role."""
    data = _submitted_data()
    email = data.get('email')
    role = data.get('role')
    if role not in ALL_ROLES:
        return jsonify({"status": "error", "message": f"Unknown role '{role}'."}), 400
    try:
        new_user_id = create_user(
            data.get('full_name'), email, data.get('password'), role, data.get('organization')
        )
    except ValueError as e:
        add_audit_log(
            user_id=None, component='Security', action='Sign Up', target=f"Email: {email}",
            status='Failure', ip_address=request.remote_addr, details={'error': str(e)}
        )
        return jsonify({"status": "error", "message": str(e)}), 400

    add_audit_log(
        user_id=new_user_id, component='Security', action='Sign Up', target=f"Email: {email}",
        status='Success', ip_address=request.remote_addr, details={'role': role}
    )
    return jsonify({"status": "success", "message": "Account created.", "id": new_user_id}), 201

@view_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Handles the login process."""
    if request.method == 'GET':
        if 'user_id' in session:
            return redirect(url_for('view_bp.home'))
        return jsonify({"status": "error", "message": "Please log in."}), 401

    data = _submitted_data()
    email = data.get('email')
    password = data.get('password') or ''
    user = get_user_for_login(email)
    if user and verify_password(user['hashed_password'], password, user['salt']):
        update_last_login(user['id'])
        add_audit_log(
            user_id=user['id'],
            component='Security',
            action='Login Success',
            status='Success',
            ip_address=request.remote_addr,
            target=f"Email: {email}"
        )
        session['user_id'] = user['id']
        session['user_name'] = user['full_name']
        session['user_role'] = user['role_name']
        return jsonify({
            "status": "success",
            "user": {"id": user['id'], "name": user['full_name'], "role": user['role_name']},
            "dashboard": url_for(ROLE_DASHBOARDS[user['role_name']]),
        })

    add_audit_log(
        user_id=None,
        component='Security',
        action='Login Attempt Failed',
        status='Failure',
        ip_address=request.remote_addr,
        target=f"Email: {email}",
        details={'reason': 'Invalid credentials'}
    )
    return jsonify({"status": "error", "message": "Invalid email or password. Please try again."}), 401

@view_bp.route('/logout')
def logout():
    """Clears the session and logs the user out."""
    user_id = session.get('user_id')
    user_name = session.get('user_name', 'Unknown User')

    add_audit_log(
        user_id=user_id,
        component='Security',
        action='Logout',
        status='Success',
        ip_address=request.remote_addr,
        target=f"User: {user_name} (ID: {user_id})"
    )

    session.clear()
    return jsonify({"status": "success", "message": "You have been successfully logged out."})

# --- Protected Routes (Login Required) ---

@view_bp.route('/home')
@role_required(*ALL_ROLES)
def home():
    """Sends the user to the dashboard of their role."""
    return redirect(url_for(ROLE_DASHBOARDS[session['user_role']]))

@view_bp.route('/scientist/dashboard')
@role_required(SCIENTIST)
def scientist_dashboard():
    stats = scientist_overview(get_all_projects(), get_samples(), get_unresolved_alerts())
    return jsonify(stats)

@view_bp.route('/policy-maker/dashboard')
@role_required(POLICY_MAKER)
def policy_maker_dashboard():
    stats = policy_overview(
        get_all_projects(), get_samples(), get_all_calculations(), get_unresolved_alerts()
    )
    return jsonify(stats)

@view_bp.route('/researcher/dashboard')
@role_required(RESEARCHER)
def researcher_dashboard():
    return jsonify(researcher_overview(get_all_projects()))

@view_bp.route('/researcher/resources')
@role_required(RESEARCHER)
def researcher_resources():
    """The resource catalogue, filtered by ?search= and ?category=."""
    category = request.args.get('category', 'all')
    return jsonify({
        "categories": CATEGORIES,
        "resources": search_resources(request.args.get('search'), category),
    })
