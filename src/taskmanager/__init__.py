# src/taskmanager/__init__.py
"""
Task Manager
============
A small HTTP service for CRUD over an in-memory task collection.

Import Guide:
-------------
Application:
    from taskmanager.main import create_app

Store:
    from taskmanager.store import TaskStore

Models:
    from taskmanager.models import Task, TaskStatus, TaskStats
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
