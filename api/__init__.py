"""HTTP surface over the event store."""
