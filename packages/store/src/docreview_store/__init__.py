"""Review state persistence: fingerprints, the state model and the JSON store."""
