"""
FeedPulse - reading recommendations and statistics for RSS articles

Ranks unread articles against a reader's recent history and turns the
article collection into reading analytics: category breakdowns, streaks,
time-of-day histograms and daily trend series.
"""

__version__ = "0.1.0"
