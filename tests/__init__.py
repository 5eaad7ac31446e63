"""
Test Suite

Structure:
- tests/unit/: Tests for individual components (config, limiter, upstream client, middleware)
- tests/test_proxy_routes.py: End-to-end requests through the ASGI app with mocked upstreams

Uses pytest with pytest-asyncio; outbound httpx calls are mocked with respx.
"""
