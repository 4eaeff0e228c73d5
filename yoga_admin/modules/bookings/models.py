# Supabase table: bookings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

bookings:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id, nullable for guest bookings)
- class_name: text
- instructor: text
- class_date: date
- class_time: text
- first_name: text
- last_name: text
- email: text
- phone: text
- experience_level: text
- special_requests: text (nullable)
- emergency_contact: text
- emergency_phone: text
- status: text - pending | confirmed | completed | cancelled
- created_at: timestamptz (default: now())
- updated_at: timestamptz

RLS: admins (is_admin()) read and update every row, users read rows they own.
"""
