"""Authentication and authorization.

Users sign in with username/password and receive a JWT access token
carrying their roles. Two roles exist:
- USER  → may read every collection and subscribe to channels
- ADMIN → may also create, update and delete
"""

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"
