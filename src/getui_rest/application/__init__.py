"""Application layer – background scheduling."""
