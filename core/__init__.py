# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the dashboard's business logic:
# - backends.py: Contracts for the identity, record and blob collaborators
# - models/: Pydantic schemas for data validation
# - services/: Taxonomy loading, file staging, activity submission,
#   activity listing, dashboard counts
#
# Services receive their collaborators as arguments and never create a
# Supabase client themselves. This keeps them testable with fakes.
# =============================================================================
