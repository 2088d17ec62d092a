# Domain Package
"""
Domain layer: crawl entities and the interfaces infrastructure implements.
"""
