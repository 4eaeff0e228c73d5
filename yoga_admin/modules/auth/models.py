# Supabase Auth
# Identity is delegated to Supabase's built-in authentication system.
# This service never handles passwords; it only resolves a bearer token to an
# identity (id + email) and evaluates that identity's roles.

"""
Supabase Auth provides:
- auth.get_user(jwt) - Resolve the identity behind an access token
- auth.admin.list_users() - Enumerate identities (service role key; used by the legacy migration)

Identities live in auth.users; user_roles.user_id references auth.users.id.
"""
