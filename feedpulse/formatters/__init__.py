"""Report formatters for FeedPulse."""
