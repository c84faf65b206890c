"""Service layer: provider clients, matching, market normalization, sentiment."""
