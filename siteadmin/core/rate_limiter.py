"""IP based rate limiting (SlowAPI), aware of proxy headers."""

import ipaddress
from typing import List

from fastapi import Request
from slowapi import Limiter


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def collect_client_ips(request: Request) -> List[str]:
    """Every valid candidate client IP, most trusted-by-proxy first.

    Order: ``X-Forwarded-For`` entries, ``X-Real-IP``, then the socket
    peer. Invalid entries and duplicates are dropped.
    """
    candidates: List[str] = []
    xff = request.headers.get("x-forwarded-for")
    if xff:
        candidates.extend(part.strip() for part in xff.split(","))
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        candidates.append(real_ip.strip())
    if request.client and request.client.host:
        candidates.append(request.client.host)

    ips: List[str] = []
    for candidate in candidates:
        if candidate and _is_ip(candidate) and candidate not in ips:
            ips.append(candidate)
    return ips


def get_client_ip(request: Request) -> str:
    """Real client IP behind a proxy; the same one login logs record."""
    ips = collect_client_ips(request)
    return ips[0] if ips else "127.0.0.1"


limiter = Limiter(key_func=get_client_ip)
