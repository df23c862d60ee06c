import time

def now_millis() -> int:
    """Milliseconds since the epoch, the unit every stored timestamp uses"""
    return int(time.time() * 1000)
