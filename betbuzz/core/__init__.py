"""Configuration, logging, error handling and middleware."""
