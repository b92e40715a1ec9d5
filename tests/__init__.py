# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Activity Admin API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_staging.py / test_taxonomy.py / test_activity_listing.py: Services
# - test_submission.py: The create-and-attach sequence
# - test_drafts.py / test_routes.py / test_auth.py: API layer
# - test_supabase_client.py: Supabase adapters against mocked clients
#
# Run tests with: pytest
# =============================================================================
