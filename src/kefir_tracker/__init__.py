"""
Kefir Tracker API.

Serverless backend for tracking home kefir fermentation: batches, their
timelines, reminders, push devices, CSV export and public share links.
"""

__version__ = "0.3.0"
