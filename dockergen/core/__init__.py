"""Core domain — models, detection, generation. No CLI concerns."""
