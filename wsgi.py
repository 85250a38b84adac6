"""WSGI entry point.

Production: `gunicorn --workers 1 wsgi:app` (the board lives in process memory,
so a single worker serves the single viewer).
Local dev: `python wsgi.py` or `flask --app wsgi run --without-threads`.
"""

import os

from app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "5000")), threaded=False)
