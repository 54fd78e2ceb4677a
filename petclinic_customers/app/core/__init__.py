"""Configuration, persistence, logging and error types shared by the app."""
