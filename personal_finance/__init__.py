"""Personal finance backend."""
