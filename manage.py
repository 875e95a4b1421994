#!/usr/bin/env python
"""
Entry point for the Django project.  It sets the default settings module
to ``blood_donor.settings`` and delegates to Django's management command
line utility.  A bare ``runserver`` listens on ``$PORT`` (default 3000).
"""
import os
import sys


def main() -> None:
    """Run administrative tasks for the Django project."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'blood_donor.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    if sys.argv[1:] == ['runserver']:
        sys.argv.append(os.getenv('PORT', '3000'))
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
