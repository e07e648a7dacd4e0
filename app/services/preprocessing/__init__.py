"""Input text preprocessing."""
