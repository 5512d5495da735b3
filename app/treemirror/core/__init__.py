"""Core application services: XDG paths and profile configuration."""
