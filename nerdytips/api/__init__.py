"""
API Package for NerdyTips Backend.

One router module per URL prefix; nerdytips.main mounts them under /api.
"""
