from flask import request, jsonify
import logging

from models import UserAccount, hash_password, verify_password
from shared.stores import get_users_store
from . import auth_bp

logger = logging.getLogger(__name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


@auth_bp.route('/register', methods=['POST'])
def register():
    data = _json_body()
    username = _clean(data.get('username'))
    email = _clean(data.get('email'))
    password = data.get('password') if isinstance(data.get('password'), str) else ""

    if not username or not email or not password:
        return jsonify({'error': 'Username, email, and password are required'}), 400

    try:
        users = get_users_store()
        if users.find_one({'email': email}):
            return jsonify({'error': 'User with this email already exists'}), 400

        user = UserAccount(username=username, email=email, password=hash_password(password))
        user_id = users.insert_one(user.to_document())
    except Exception as e:
        logger.error(f"Registration error: {e}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500

    logger.info(f"Admin account registered: {user_id}")
    return jsonify({'message': 'User registered successfully', 'userId': user_id}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = _json_body()
    email = _clean(data.get('email'))
    password = data.get('password') if isinstance(data.get('password'), str) else ""

    if not email or not password:
        return jsonify({'error': 'Email and password are required'}), 400

    try:
        doc = get_users_store().find_one({'email': email})
    except Exception as e:
        logger.error(f"Login error: {e}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500

    if not doc or not verify_password(password, doc.get('password') or ''):
        return jsonify({'error': 'Invalid email or password'}), 401

    user = UserAccount(**doc)
    return jsonify({'message': 'Login successful', 'user': user.to_public()}), 200


@auth_bp.route('/me', methods=['POST'])
def me():
    data = _json_body()
    email = _clean(data.get('email'))

    if not email:
        return jsonify({'error': 'Email is required'}), 400

    try:
        doc = get_users_store().find_one({'email': email})
    except Exception as e:
        logger.error(f"Get user error: {e}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500

    if not doc:
        return jsonify({'error': 'User not found'}), 404

    return jsonify({'user': UserAccount(**doc).to_public()}), 200
