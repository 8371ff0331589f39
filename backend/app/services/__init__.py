"""
Services Layer

Authentication building blocks shared by the routes:
- password hashing (security)
- session tokens and identities (session_store)
- credential checks and the auth gate dependency (auth)
"""
