"""Core services — classification and artifact generation."""
