"""Constants shared by every layer: integer limits, error codes, backend names."""
