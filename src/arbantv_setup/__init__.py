"""ArbanTv database setup.

Provisions the fields and indexes of the ArbanTv collections on an
Appwrite database.
"""

__version__ = "0.1.0"
