# Supabase table: app_state
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

app_state:
- id: text (primary key) - group id for group members, user id for everyone else
- state: jsonb (not null) - opaque client blob (reward pool, categories, ...)
- updated_at: timestamp

Rows are replaced wholesale on every write; there is no merge or versioning.
"""
