"""
Authentication Module

Registration and login with bcrypt-hashed passwords, bearer tokens signed
with the application secret, and the `get_current_user` / `require_admin`
dependencies used to guard the booking and bus routes.
"""
