"""Terminal UI for Magno."""
