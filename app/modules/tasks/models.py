# Supabase table: tasks
# This file documents the expected database schema
# The table, its policies and indexes are created in supabase/migrations/

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to profiles.id, not null, on delete cascade) - owner
- description: text (not null)
- due_date: date (not null)
- completed: boolean (not null, default: false)
- created_at: timestamptz (not null, default: now())

Row level security (every policy is auth.uid() = user_id):
- select, update, delete: USING
- insert: WITH CHECK

Indexes: idx_tasks_user_id (user_id), idx_tasks_due_date (due_date)
"""
