"""docreview command-line interface."""
