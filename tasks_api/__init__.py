"""Tasks API: CRUD over tasks stored in Firestore."""

__version__ = "1.0.0"
