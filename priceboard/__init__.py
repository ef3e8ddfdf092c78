"""Price board: resilient CSV ingestion plus a filterable price table."""
