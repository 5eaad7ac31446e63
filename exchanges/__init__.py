"""
Exchange Connectors Package

One subpackage per upstream exchange. Each exposes an api_client.py that
knows the exchange's base URL, endpoint paths and parameter defaults, and
delegates the actual HTTP call to core.upstream.UpstreamClient.
"""
