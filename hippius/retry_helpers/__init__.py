from .retry_util import RetryPolicy, exponential_backoff, retry_with_backoff, run_with_retry

__all__ = ["RetryPolicy", "exponential_backoff", "retry_with_backoff", "run_with_retry"]
