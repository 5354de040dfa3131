# Supabase table: users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null) - unique by convention only
- color: text (nullable)
- photo: text (nullable)
- token: text (unique, not null) - bearer token, only returned by /users/login
- group_id: uuid (nullable) - back-reference to groups.id
- solo: boolean (default: false) - user chose to work without a group
- theme: text (nullable)
- color_overrides: jsonb (default: '{}') - other user id -> color
- notifications: jsonb (default: '[]') - mailbox, see modules/notifications
- created_at: timestamp (default: now())

group_id = null and solo = false means the account still needs setup.
"""
