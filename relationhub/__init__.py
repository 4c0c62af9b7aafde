"""RelationHub relationship-management data service."""
