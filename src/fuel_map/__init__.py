"""UK fuel price map Django project."""
