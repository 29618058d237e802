"""`python -m aidboard`: serve the API on BACKEND_HOST:BACKEND_PORT (0.0.0.0:3001)."""

from aidboard.main import run

if __name__ == "__main__":
    run()
