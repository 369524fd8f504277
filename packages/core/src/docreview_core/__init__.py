"""Ballerina API documentation review: configuration, discovery, rewrite providers and orchestration."""
