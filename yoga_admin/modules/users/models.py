# Supabase tables read: bookings, yoga_queries, user_roles, roles, admin_users
# The user directory has no table of its own; auth.users is not reachable
# through PostgREST, so users are derived from the records they created.

"""
A directory entry is keyed by email:
- id: bookings.user_id when the user has booked while signed in, else null
- full_name: "<first_name> <last_name>" from their latest booking, or yoga_queries.name
- bookings_count / queries_count: rows per email
- roles: role names from user_roles (only when id is known)
- is_admin: computed by the authorization evaluator, never by reading admin_users directly
"""
