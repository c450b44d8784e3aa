"""端到端测试包。

通过 ASGITransport 驱动完整的 FastAPI 应用：
- KV 使用内存实现
- 刷新队列在请求内同步执行
- 上游抓取使用预设响应，不访问网络

运行方式：
    uv run pytest tests/e2e/ -v
"""
