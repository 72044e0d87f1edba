"""Config – plugin settings and their validation errors."""
