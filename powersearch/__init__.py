# PowerSearch Package
"""
Search engine switcher core.

Components:
  - Engines: built-in and custom search engine registry
  - Search: query extraction from page URLs and destination URL building
  - Services: persistent custom engine storage and the switcher session
"""

__version__ = "0.1.0-dev"
