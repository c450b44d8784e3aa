"""集成测试包。

需要真实 Redis（redis://localhost:6379/1，测试前后会 FLUSHDB）。

运行方式：
    docker run -d -p 6379:6379 redis:7

    uv run pytest tests/integration/ -v -m integration
"""
