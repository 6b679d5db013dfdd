"""
Guild Wars 2 API Module

This module handles rate-limited access to the Guild Wars 2 web API.

Components:
- config.py - API settings (base URL, quota, batching)
- rate_limiter.py - Shared request quota and the rate limited HTTP client
- fanout.py - Concurrent fan-out/fan-in helper used by every fetch stage
- fetcher.py - Typed fetchers for characters, seasons and quests
- schemas.py - Response models
"""
