"""
StreamHub Test Suite

Test Categories:
- unit/: Fast, isolated unit tests
- integration/: Resolver, registry and extractors wired together, HTTP mocked
- fixtures/: Fake sources and registries, result builders
"""
