"""
Cross-venue spread monitor.

Polls a last-trade price from one venue and a best bid/ask from another,
tracks the two directional spreads over a rolling window, and serves them
on a small auto-refreshing dashboard.
"""

__version__ = "1.0.0"
__author__ = "Tim"
