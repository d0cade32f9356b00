"""Document cache."""
