"""
WSGI entry point

    gunicorn wsgi:app
    python wsgi.py
"""
from newsbroker import create_app

app = create_app()


if __name__ == '__main__':
    app.run(debug=True, port=3000)
