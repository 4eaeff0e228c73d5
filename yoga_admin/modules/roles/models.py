# Supabase tables: roles, user_roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# DDL, helper functions and RLS policies live in supabase/migrations

"""
Expected Supabase table structure:

roles:
- id: uuid (primary key, default gen_random_uuid())
- name: text (not null, unique) - e.g., "super_admin", "mantra_curator"
- description: text (nullable)
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now(), bumped by trigger)

user_roles:
- user_id: uuid (references auth.users.id, on delete cascade)
- role_id: uuid (references roles.id, on delete cascade)
- assigned_by: uuid (references auth.users.id, nullable)
- assigned_at: timestamptz (default: now())
- primary key (user_id, role_id)
"""
