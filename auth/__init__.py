"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification
  • Password hashing (bcrypt, salted)
  • Register / Login API routes
  • ``require_identity`` FastAPI dependency (the auth gate)
  • Ownership checks for user-owned records
"""
