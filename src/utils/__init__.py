"""
Utility modules for the G2 review scraper.

Cross-cutting concerns:
- Storage: Output file and debug artifact I/O
"""
