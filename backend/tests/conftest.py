import os

# Must be set before anything from the ladder package is imported.
os.environ.setdefault("ENVIRONMENT", "CI")
