"""Blood donor application.

Models, role-scoped authentication, services and API views for donors,
hospitals and administrators.
"""
