"""Job feed data layer: paginated fetching, normalization and bookmarks."""
