import time


def make_payload(length: int) -> bytes:
    """Deterministic, position-dependent bytes"""
    return bytes((i * 7 + i // 251) % 256 for i in range(length))


def wait_for(predicate, timeout: float = 2.0, interval: float = 0.01) -> bool:
    """Poll until predicate() is true or the timeout expires"""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()
