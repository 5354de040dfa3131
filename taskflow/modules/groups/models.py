# Supabase tables: groups, users (group_id back-reference)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

groups:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- photo: text (nullable) - data URL or storage reference
- creator_id: uuid (references users.id, not null)
- member_ids: uuid[] (not null) - always contains creator_id while the group exists
- invite_code: text (unique, upper-case, 8 characters)
- created_at: timestamp (default: now())

users.group_id points back at groups.id. The store does not enforce the
relationship; GroupService keeps member_ids and users.group_id in step.
"""
