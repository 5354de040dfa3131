# Supabase table: tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

tasks:
- id: uuid (primary key, default: gen_random_uuid())
- title: text (not null)
- assignee: text (nullable) - user id, or "all" for every group member
- done: boolean (default: false)
- creator_id: uuid (not null)
- group_id: uuid (nullable) - set for group tasks
- owner_id: uuid (nullable) - set for solo tasks, together with group_id = null
- fields: jsonb (default: '{}') - every other client-defined field
- created_at: timestamp (default: now())

Scope columns (group_id, owner_id) are written once on insert and never
updated.
"""
