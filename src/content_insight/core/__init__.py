"""Core utilities: exceptions, logging configuration and credentials."""
