# Supabase table: profiles
# Schema is documented in artune/modules/auth/models.py; rows are created at registration.
# This module only reads and edits the contact fields of the caller's own row.

"""
Editable columns:
- full_name: text (nullable)
- phone: text (nullable)
- updated_at: timestamp

email and role are read-only here.
"""
