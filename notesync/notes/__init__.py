"""
Note text handling.

Document codec, change detection, wire envelope and content conversion.
"""
