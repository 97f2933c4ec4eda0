"""Use cases - one class per user intention, each returning a Result.

Use cases are organized by aggregate:
- user: create, read, update, list, delete/restore, role assignment
- role: create, read, update, status changes, list, delete
"""
