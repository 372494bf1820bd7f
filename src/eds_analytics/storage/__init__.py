"""
Storage layer: the data model shared with the Edge Data Store.
"""
