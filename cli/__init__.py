"""
Command line interface for nbsreader.
"""
