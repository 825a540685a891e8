"""
Service layer: record lookup and asset resolution.
"""
