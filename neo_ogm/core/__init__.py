"""Configuration and logging for neo-ogm."""
