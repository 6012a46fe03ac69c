"""
ddgenrich: DuckDuckGo organization enrichment connector.
"""

__version__ = '0.1.0'
