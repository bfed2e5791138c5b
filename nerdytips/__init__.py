"""
NerdyTips Backend.

FastAPI service serving AI-generated football predictions behind a simple
authentication and subscription-tier layer.
"""

__version__ = "0.1.0"
