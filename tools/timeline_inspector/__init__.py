"""Console inspector over event snapshots."""
