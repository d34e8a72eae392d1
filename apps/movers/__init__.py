"""TCG movers proxy: ranks trading cards by recent price movement."""
