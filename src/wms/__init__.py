"""WMS - warehouse management backend (users, roles, authentication)."""
