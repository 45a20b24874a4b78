"""
auth — User registration and login.

Provides:
  • Password hashing (Argon2id)
  • JWT access token issuance & verification
  • ``CredentialManager`` (register / login workflow)
  • Register / Login / Me API routes
"""
