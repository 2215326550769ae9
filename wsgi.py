"""
Production WSGI entry point.

Gunicorn will import this file and look for a top-level variable named `app`.
Run a single worker: reminders live in one local file and notifications in
one in-process scheduler.

Usage:
    gunicorn -w 1 --threads 4 -b 127.0.0.1:$PORT wsgi:app
"""

from aquamate import create_app

# Gunicorn looks for a top-level 'app' variable here.
app = create_app()
