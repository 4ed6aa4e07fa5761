"""Domain layer: media types, operation results and exceptions."""
