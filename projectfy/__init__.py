"""
ProjectFy core: on-device persistence and derived aggregates for the
project-management app (projects, tasks, appointments, notes,
attachments, time tracking and purchases).
"""

__version__ = "1.0.0"
