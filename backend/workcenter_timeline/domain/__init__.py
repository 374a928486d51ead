"""
Domain Layer

Orders, timeline scales and the services that partition, select and project
them. Nothing in here performs I/O.
"""
