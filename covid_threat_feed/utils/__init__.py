"""Console logging and output file helpers."""
