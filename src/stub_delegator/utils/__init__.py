"""Console, logging and diff helpers."""
