# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (not null)
- role: text (not null, one of 'artist' | 'client' | 'admin')
- full_name: text (nullable)
- phone: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

A profiles row is written once at registration, right after auth.sign_up().
The role column is never updated afterwards.
"""
