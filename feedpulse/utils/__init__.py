"""Text and date helpers for FeedPulse."""
