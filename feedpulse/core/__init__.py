"""Domain model, ranking and aggregation for FeedPulse."""
