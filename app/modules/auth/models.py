# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation, refresh and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.set_session() - Restore a session from access/refresh tokens
- auth.on_auth_state_change() - Session-change notifications
- auth.sign_out() - Logout users

Every new auth.users row fires the on_auth_user_created trigger, which
inserts the matching public.profiles row (see app/modules/profiles/models.py).
"""
