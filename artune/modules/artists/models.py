# Supabase tables: artist_profiles, artist_services
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

artist_profiles:
- id: uuid (primary key)
- user_id: uuid (not null, unique, foreign key to profiles.id)
- display_name: text (not null)
- bio: text (nullable)
- profile_image_url: text (nullable)
- portfolio_images: text[] (nullable)
- location: text (nullable)
- years_experience: integer (nullable, >= 0)
- hourly_rate: numeric (nullable, >= 0)
- availability_status: text (default: 'available'; 'available' | 'busy' | 'unavailable')
- verified: boolean (default: false)
- last_active: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

artist_services:
- id: uuid (primary key)
- artist_id: uuid (not null, foreign key to artist_profiles.id)
- category: text (not null)
- title: text (not null)
- description: text (nullable)
- price: numeric (nullable, >= 0)
- price_type: text (default: 'fixed'; 'fixed' | 'hourly' | 'negotiable')
- duration_minutes: integer (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

The unique constraint on artist_profiles.user_id is what onboarding's
upsert(on_conflict="user_id") relies on.
"""
