"""Django project package for the blood donor management backend."""
