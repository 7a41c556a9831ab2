# Supabase table: profiles
# This file documents the expected database schema
# Rows are created by the on_auth_user_created trigger, never by the API

"""
Expected Supabase table structure:
- id: uuid (primary key, references auth.users.id on delete cascade)
- email: text (nullable) - copied from auth.users at sign-up
- created_at: timestamptz (not null, default: now())

Row level security:
- select, update: auth.uid() = id

Trigger:
- on_auth_user_created AFTER INSERT ON auth.users runs handle_new_user()
  (security definer), inserting (new.id, new.email). A second insert for the
  same id fails on the primary key.

Deleting a profile cascades to its tasks.
"""
