#!/usr/bin/env python
"""Script to run the Todo App backend server."""
from todo_api.main import run

if __name__ == "__main__":
    run()
