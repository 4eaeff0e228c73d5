# Supabase tables: yoga_queries, contact_messages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

yoga_queries:
- id: uuid (primary key)
- name: text
- email: text
- subject: text (nullable)
- message: text
- status: text (nullable)
- response: text (nullable) - admin reply
- created_at: timestamptz (default: now())
- updated_at: timestamptz (nullable)

contact_messages:
- id: uuid (primary key)
- name: text
- email: text
- phone: text (nullable)
- subject: text (nullable)
- message: text
- status: text (nullable)
- created_at: timestamptz (default: now())
- updated_at: timestamptz (nullable)

RLS: both tables are readable and updatable only by admins (is_admin()).
"""
