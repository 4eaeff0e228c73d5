# Supabase table: user_roles (see modules/roles/models.py for the full layout)
# One row per (identity, role) grant; the composite primary key makes a
# duplicate grant a no-op when inserted with ON CONFLICT DO NOTHING.

"""
Lifecycle of a single (user_id, role_id) pair:

    unassigned --assign--> assigned      (assign while assigned: no-op)
    assigned   --revoke--> unassigned    (revoke while unassigned: no-op)

There is no update; changing a grant means revoke + assign.
"""
