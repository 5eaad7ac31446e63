"""
Core Package

Exchange-agnostic building blocks of the proxy:
- config / logging: settings and log setup
- rate_limiter: per-caller fixed-window quota
- upstream: outbound HTTP client and target/response models
- errors: translation of upstream outcomes into responses
"""
