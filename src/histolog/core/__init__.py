"""Pure interval-extraction, bucketing and rendering logic."""
