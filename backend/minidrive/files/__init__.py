"""File storage module for MiniDrive.

This module handles uploads, downloads and listing of the storage root.
Client paths are sanitized before use so nothing is written or served
outside the root.

Known limitations:
- Two uploads to the same path race; the last completed write wins.
- The listing walks the whole tree on every index request.
"""
