"""
Role Admin

UserInRole resource service: projected lookup, filtered list, create,
update, JSON Patch and delete over an async SQLAlchemy store.
"""

__version__ = "0.1.0"
