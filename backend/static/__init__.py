"""Single-page client served at /."""
