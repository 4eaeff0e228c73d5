# Supabase table: articles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

articles:
- id: uuid (primary key)
- title: text (not null)
- content: text
- excerpt: text (nullable)
- category: text (nullable)
- image_url: text (nullable)
- author_id: uuid (references auth.users.id, nullable)
- created_at: timestamptz (default: now())
- updated_at: timestamptz (nullable)

RLS: public read; writes require has_role('mantra_curator') OR is_admin().
"""
