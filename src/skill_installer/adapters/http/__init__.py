from .requests_fetcher import RequestsFetcher

__all__ = ["RequestsFetcher"]
